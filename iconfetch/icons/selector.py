"""Best icon selection by fixed icon type priority"""

import logging
from typing import Optional

from iconfetch.icons.constants import PRIORITY_ORDER
from iconfetch.icons.models import IconType, ValidatedIcon

logger = logging.getLogger(__name__)


class IconSelector:
    """Select the best icon by icon type priority."""

    @staticmethod
    def pick_best_icon(
        validated_icons: list[ValidatedIcon],
        priority_order: list[IconType] = PRIORITY_ORDER,
    ) -> Optional[ValidatedIcon]:
        """Return the icon of the highest priority type present, or None.

        When several icons share a type, the last one in `validated_icons` wins.
        """
        by_type: dict[IconType, ValidatedIcon] = {}
        for icon in validated_icons:
            by_type[icon.icon_type] = icon

        for icon_type in priority_order:
            if icon_type in by_type:
                return by_type[icon_type]

        if validated_icons:
            logger.debug(
                "No prioritized icon type among "
                f"{sorted({icon.icon_type.value for icon in validated_icons})}"
            )
        return None
