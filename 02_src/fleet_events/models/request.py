"""Request models validated before any host is contacted."""

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class Credential(BaseModel):
    """Username and secret passed through to the remote APIs."""

    model_config = ConfigDict(frozen=True)

    username: str = Field(min_length=1)
    password: SecretStr


class QueryRequest(BaseModel):
    """A sweep over one or more hosts."""

    model_config = ConfigDict(frozen=True)

    computer_names: list[str] = Field(min_length=1)
    credential: Credential | None = None
    hours_back: int = Field(default=1, gt=0, strict=True)

    @field_validator("computer_names")
    @classmethod
    def _normalize_names(cls, value: list[str]) -> list[str]:
        """Strip names and drop case-insensitive duplicates, first one kept."""
        names: list[str] = []
        seen: set[str] = set()
        for name in value:
            name = name.strip()
            if not name:
                raise ValueError("computer names must not be blank")
            if name.casefold() in seen:
                continue
            seen.add(name.casefold())
            names.append(name)
        return names
