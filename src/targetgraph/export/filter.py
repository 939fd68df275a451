"""
Visibility policy for the exported graph.

Decides, per link item, whether it gets a node; an edge is visible only
when both of its endpoints are.
"""

from __future__ import annotations

from targetgraph.export.settings import ExportSettings
from targetgraph.model.models import LinkItem, TargetType, is_reserved_target

# Dashboard-driver utilities created by CI testing helpers
CI_UTILITY_PREFIXES = ("Nightly", "Continuous", "Experimental")


class TargetFilter:
    """
    Pure inclusion policy over link items.

    Rules, first match wins:
    1. Name matches a user ignore pattern -> excluded
    2. Reserved build-system target -> excluded
    3. No backing target -> excluded unless externals are shown
    4. Utility named after a CI dashboard mode -> excluded
    5. Imported target while externals are hidden -> excluded
    6. Otherwise excluded iff its target type is disabled
    """

    def __init__(self, settings: ExportSettings):
        self.settings = settings

    def is_excluded(self, item: LinkItem) -> bool:
        name = item.name

        if any(pattern.search(name) for pattern in self.settings.ignore_patterns):
            return True

        if is_reserved_target(name):
            return True

        if item.target is None:
            return not self.settings.show_external_targets

        if item.target.type == TargetType.UTILITY and name.startswith(CI_UTILITY_PREFIXES):
            return True

        if item.target.imported and not self.settings.show_external_targets:
            return True

        return not self.settings.target_types.is_enabled(item.target.type)

    def is_link_visible(self, depender: LinkItem, dependee: LinkItem) -> bool:
        return not (self.is_excluded(depender) or self.is_excluded(dependee))
