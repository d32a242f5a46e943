"""Exceptions for rule parsing, validation, storage and combination."""


class RuleError(Exception):
    """Base class for all rule-related errors."""
    pass


class RuleSyntaxError(RuleError):
    """Raised when rule syntax is invalid."""
    def __init__(self, message: str, position: int | None = None):
        self.position = position
        super().__init__(f"{message} at position {position}" if position is not None else message)


class InvalidNodeError(RuleError):
    """Raised when a document cannot be decoded into an AST node."""
    pass


class AttributeValidationError(RuleError):
    """Raised when a rule references an attribute missing from the catalog."""
    def __init__(self, attribute_name: str):
        self.attribute_name = attribute_name
        super().__init__(f"Attribute {attribute_name} is not in the catalog")


class RulesNotFoundError(RuleError):
    """Raised when one or more requested rules do not exist."""
    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"The following rules do not exist: {', '.join(self.missing)}")


class DuplicateRuleError(RuleError):
    """Raised when a rule name is already taken."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'A rule with the name "{name}" already exists.')


class CatalogWriteError(RuleError):
    """Raised when attributes could not be written to the catalog."""
    pass
