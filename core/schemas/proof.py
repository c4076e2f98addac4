"""
Schemas
File: proof.py

Purpose: Portable inclusion-proof bundle for one field, in the shape an
external verifier is called with: verify(timestamp, value, proof, index).
"""

from pydantic import BaseModel, ConfigDict, Field


class FieldProof(BaseModel):
    """
    Evidence that a field held a value in a committed record.

    Attributes:
        field_name: Catalog field the proof is for
        index: Leaf index of the field, in [N, 2N)
        value: Fixed-width token claimed for the field
        siblings: Sibling hashes, leaf sibling first, root's child last
        root: Root the proof was generated against (informational)
        timestamp: Commitment key, when the root was published
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    field_name: str = Field(..., min_length=1)
    index: int = Field(..., ge=1)
    value: str
    siblings: tuple[str, ...] = Field(default_factory=tuple)
    root: str | None = None
    timestamp: int | None = Field(default=None, ge=0)

    @property
    def proof_length(self) -> int:
        return len(self.siblings)

    def with_siblings(self, siblings: list[str] | tuple[str, ...]) -> "FieldProof":
        """Copy with a different sibling path."""
        return self.model_copy(update={"siblings": tuple(siblings)})

    def with_value(self, value: str) -> "FieldProof":
        """Copy with a different claimed value."""
        return self.model_copy(update={"value": value})


__all__ = ["FieldProof"]
