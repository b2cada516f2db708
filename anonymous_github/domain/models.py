from typing import Dict, List, Literal, Optional, get_args
from pydantic import BaseModel, Field, ConfigDict

# Discriminator carried by every sealed configuration.
ConfigKind = Literal["gh"]
CONFIG_KIND: str = get_args(ConfigKind)[0]

EntryType = Literal["file", "dir"]


class SealedConfig(BaseModel):
    """
    Immutable configuration sealed into a share token.
    Field aliases are the names used in the serialized form.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: ConfigKind = Field(..., alias="type", description="Fixed discriminator tag")
    repository_id: str = Field(..., alias="repo", min_length=1, description="Repository in owner/name form")
    ref: str = Field(..., alias="branch", min_length=1, description="Branch or tag name")
    terms: List[str] = Field(
        ...,
        alias="anonymizeTerms",
        description="Ordered terms to hide; position i maps to placeholder XXXX-(i+1)",
    )

    @classmethod
    def create(cls, repository_id: str, ref: str, terms: List[str]) -> "SealedConfig":
        return cls(kind=CONFIG_KIND, repository_id=repository_id, ref=ref, terms=list(terms))


class RemoteEntry(BaseModel):
    """A single item of a flat remote listing, as the repository host reports it."""
    model_config = ConfigDict(frozen=True)

    path: str
    type: EntryType
    size: Optional[int] = None


class RepositoryEntry(BaseModel):
    """
    Immutable entry of a normalized repository listing.
    `path` is the unique key within a listing.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Last path segment")
    path: str = Field(..., description="Slash-joined path relative to the repository root")
    type: EntryType
    size: Optional[int] = Field(None, ge=0, description="Only known for files")


class TreeNode(BaseModel):
    """Node of the nested hierarchy derived from a listing."""
    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    type: EntryType
    size: Optional[int] = None
    children: Dict[str, "TreeNode"] = Field(default_factory=dict)

    @property
    def is_dir(self) -> bool:
        return self.type == "dir" or bool(self.children)


class RepositoryInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    full_name: str
    private: bool = False
    default_branch: str
    branches: List[str] = Field(default_factory=list)
    has_readme: bool = False
    readme_path: Optional[str] = None


class RepositoryFile(BaseModel):
    """A single file fetched from the repository host, content already decoded."""
    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    size: int = Field(0, ge=0)
    content: str


class AnonymizedFile(BaseModel):
    """A file as served to a viewer, with every sealed term replaced."""
    model_config = ConfigDict(frozen=True)

    filename: str
    content: str
    is_markdown: bool
    is_code: bool
    original_path: str
    language: Optional[str] = None


class RepositoryListing(BaseModel):
    model_config = ConfigDict(frozen=True)

    repository_id: str
    ref: str
    entries: List[RepositoryEntry] = Field(default_factory=list)


class SealResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str
    info: RepositoryInfo
