from pydantic import BaseModel, ConfigDict, Field

from policy_probe.chunking.models import Chunk


class PolicySegment(BaseModel):
    """A chunk as stored in the segment index."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    content: str = Field(min_length=1)
    parent_heading: str
    top_level_section: str
    section_path: str
    source_page: int = Field(default=1, ge=1)

    @classmethod
    def from_chunk(cls, chunk: Chunk) -> "PolicySegment":
        return cls(**chunk.to_record())
