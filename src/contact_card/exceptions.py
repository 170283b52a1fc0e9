"""Exception hierarchy for contact card generation."""


class ContactCardError(Exception):
    """Base class for contact card errors."""


class CardContractError(ContactCardError, TypeError):
    """Serializer was handed something that is not a ContactRecord."""


class UnknownFieldError(ContactCardError, ValueError):
    """Builder received an input key it does not recognize."""

    def __init__(self, keys: list[str]):
        self.keys = sorted(keys)
        super().__init__(f"Unknown field(s): {', '.join(self.keys)}")
