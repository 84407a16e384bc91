"""Response models for the icon API"""

import base64

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from iconfetch.icons.models import IconType, ValidatedIcon


class IconResponse(BaseModel):
    """A validated icon as returned to API clients, bytes base64-encoded."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str
    icon_type: IconType
    mime_type: str
    length: int
    base64: str

    @classmethod
    def from_icon(cls, icon: ValidatedIcon) -> "IconResponse":
        """Build the response model of a validated icon."""
        return cls(
            url=icon.url,
            icon_type=icon.icon_type,
            mime_type=icon.mime_type,
            length=icon.length,
            base64=base64.b64encode(icon.content).decode("ascii"),
        )
