"""Rule entity.

A rule is a named boolean expression kept both as the text the user wrote
and as its parsed tree.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from rulecraft.core.rules.ast import Node


@dataclass
class Rule:
    """Stored rule.

    Attributes:
        name: Unique rule name.
        rule_string: Original rule text.
        ast: Parsed rule tree.
        created_at: Timestamp when the rule was created.
    """

    name: str
    rule_string: str
    ast: Node
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate rule after initialization."""
        if not self.name:
            raise ValueError("Rule name is required")
        if not self.rule_string:
            raise ValueError("Rule string is required")
