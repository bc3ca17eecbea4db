"""Archive path templates.

A template is expanded in two passes. First the ``$`` tags are replaced by
activity fields in a single scan, so substituted text is never scanned again.
The result is then expanded with ``strftime`` against the activity timestamp.

Because the time pass runs last, a field value containing ``%`` is read as a
time directive as well. ``$s`` for a sport named ``100%`` becomes whatever
``%`` followed by the next character expands to.
"""

import logging
import re
from typing import Callable, Dict, Tuple

from ..models.activity import ActivityData

logger = logging.getLogger(__name__)


class ArchiveTemplate:
    """Template system for archive paths."""

    # tag -> (getter, description, example)
    TAGS: Dict[str, Tuple[Callable[[ActivityData], str], str, str]] = {
        '$s': (lambda ad: ad.sport, 'sport type', 'running'),
        '$S': (lambda ad: ad.sub_sport, 'sport subtype', 'trail'),
        '$n': (lambda ad: ad.sport_name, 'sport name', 'trail_run'),
        '$w': (lambda ad: ad.workout_name, 'workout name', 'temporun_8km'),
    }

    _TAG_PATTERN = re.compile('|'.join(re.escape(tag) for tag in TAGS))

    def render(self, template: str, activity: ActivityData) -> str:
        """Expand tags and time directives of a template.

        Args:
            template: Template with ``$`` tags and ``strftime`` directives
            activity: Activity data the values are taken from

        Returns:
            The expanded string. Never raises for malformed directives.
        """
        tagged = self.substitute_tags(template, activity)
        return self.format_time(tagged, activity)

    def substitute_tags(self, template: str, activity: ActivityData) -> str:
        """Replace all ``$`` tags in one pass."""
        return self._TAG_PATTERN.sub(lambda m: self.TAGS[m.group(0)][0](activity), template)

    @staticmethod
    def format_time(pattern: str, activity: ActivityData) -> str:
        """Expand ``strftime`` directives, leaving the pattern as is if it is rejected."""
        try:
            return activity.timestamp.strftime(pattern)
        except ValueError as e:
            logger.warning(f"Unable to expand time directives in '{pattern}': {e}")
            return pattern

    @classmethod
    def help_table(cls) -> str:
        """Tag table for the command line help."""
        lines = [
            "  Tag   Description     Example          Default",
            "  ------------------------------------------------",
        ]
        for tag, (_, description, example) in cls.TAGS.items():
            lines.append(f"  {tag:<5} {description:<15} {repr(example):<16} 'unknown'")
        return "\n".join(lines)


_default_template = ArchiveTemplate()


def expand_template(template: str, activity: ActivityData) -> str:
    """Expand an archive template for the given activity."""
    return _default_template.render(template, activity)
