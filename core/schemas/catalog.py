"""
Schemas
File: catalog.py

Purpose: The field catalog, the ordered list of field names that fixes the
shape of a record and the canonical order of the tree's leaves.

A field's position in the catalog is the sole source of its leaf index:
index = N + position, with N the catalog size.
"""

from collections import Counter

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import CatalogConfigurationException, FieldNotFoundException


DEFAULT_TOKEN_WIDTH = 32
DEFAULT_FILLER = " "

# Simplified beacon block: execution-header fields followed by consensus-layer
# fields, flattened to one level.
SIMPLIFIED_BEACON_BLOCK_FIELDS: tuple[str, ...] = (
    "ParentHash",
    "FeeRecipient",
    "StateRoot",
    "Coinbase",
    "ReceiptHash",
    "Time",
    "TxHash",
    "GasUsed",
    "ProposerSlashings",
    "AttesterSlashings",
    "Deposits",
    "VoluntaryExits",
    "ParentRoot",
    "Slot",
    "Graffiti",
    "PrevRandao",
)


def is_power_of_two(n: int) -> bool:
    """True for 1, 2, 4, 8, ..."""
    return n > 0 and (n & (n - 1)) == 0


class FieldCatalog(BaseModel):
    """
    Immutable ordered catalog of field names.

    Invariants:
    - At least one field, and the count is a power of two
    - Names are distinct and non-empty
    - token_width >= 1 and filler is exactly one character
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    field_names: tuple[str, ...] = Field(
        ...,
        description="Ordered field names; order defines leaf order",
    )
    token_width: int = Field(
        default=DEFAULT_TOKEN_WIDTH,
        description="Fixed width of every canonical token, in characters",
    )
    filler: str = Field(
        default=DEFAULT_FILLER,
        description="Character used to right-pad short source values",
    )

    @model_validator(mode="after")
    def _check_shape(self) -> "FieldCatalog":
        size = len(self.field_names)
        if not is_power_of_two(size):
            raise CatalogConfigurationException(
                f"Catalog size must be a power of two, got {size}",
                details={"size": size},
            )
        if any(not name for name in self.field_names):
            raise CatalogConfigurationException("Catalog field names must be non-empty")
        if len(set(self.field_names)) != size:
            counts = Counter(self.field_names)
            dupes = sorted(name for name, count in counts.items() if count > 1)
            raise CatalogConfigurationException(
                "Catalog field names must be distinct",
                details={"duplicates": dupes},
            )
        if self.token_width < 1:
            raise CatalogConfigurationException(
                f"Token width must be positive, got {self.token_width}",
            )
        if len(self.filler) != 1:
            raise CatalogConfigurationException(
                f"Filler must be a single character, got {self.filler!r}",
            )
        return self

    @property
    def size(self) -> int:
        """Number of fields, N."""
        return len(self.field_names)

    @property
    def depth(self) -> int:
        """Number of levels above the leaves, log2(N); also the proof length."""
        return self.size.bit_length() - 1

    @property
    def leaf_range(self) -> range:
        """Valid leaf indices, [N, 2N)."""
        return range(self.size, 2 * self.size)

    def contains(self, field_name: str) -> bool:
        return field_name in self.field_names

    def position(self, field_name: str) -> int:
        """
        0-based position of a field in the catalog.

        Raises:
            FieldNotFoundException: If the field is not in the catalog
        """
        try:
            return self.field_names.index(field_name)
        except ValueError:
            raise FieldNotFoundException(field_name) from None

    def index_of(self, field_name: str) -> int:
        """Leaf index of a field: N + position."""
        return self.size + self.position(field_name)

    def field_at(self, index: int) -> str:
        """
        Field name stored at a leaf index.

        Raises:
            IndexError: If index is outside [N, 2N)
        """
        if index not in self.leaf_range:
            raise IndexError(
                f"Leaf index {index} out of range [{self.size}, {2 * self.size})"
            )
        return self.field_names[index - self.size]


DEFAULT_CATALOG = FieldCatalog(field_names=SIMPLIFIED_BEACON_BLOCK_FIELDS)


__all__ = [
    "DEFAULT_TOKEN_WIDTH",
    "DEFAULT_FILLER",
    "SIMPLIFIED_BEACON_BLOCK_FIELDS",
    "DEFAULT_CATALOG",
    "FieldCatalog",
    "is_power_of_two",
]
