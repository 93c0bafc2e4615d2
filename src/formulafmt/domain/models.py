from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError


class FormatOptions(BaseModel):
    """layout settings for the renderer."""
    indent_width: int = Field(2, gt=0)
    line_width: int = Field(80, gt=0)

    @classmethod
    def create(cls, **values) -> "FormatOptions":
        """builds options, turning validation failures into ConfigError."""
        # None means "not given"
        values = {k: v for k, v in values.items() if v is not None}
        try:
            return cls(**values)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ConfigError(f"invalid {cls.__name__}: {problems}") from e


class Preferences(FormatOptions):
    """stored user preferences; tighter bounds than ad-hoc options."""
    indent_width: int = Field(2, ge=1, le=8)
    line_width: int = Field(80, ge=10)
