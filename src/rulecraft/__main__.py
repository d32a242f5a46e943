"""Entry point for 'python -m rulecraft' command."""

from rulecraft.cli import main

if __name__ == "__main__":
    main()
