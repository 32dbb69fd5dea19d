"""Secret value type for passphrases."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Secret:
    """
    A pre-shared passphrase.

    The value never appears in repr() or str(), so a Secret can be
    logged or put in an exception message without leaking it.
    """

    value: str = field(repr=False)

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value:
            raise ValueError("Secret must be a non-empty string")

    def __str__(self) -> str:
        return "Secret(**********)"

    def encode(self) -> bytes:
        return self.value.encode("utf-8")
