from abc import abstractmethod
from typing import Optional


class PropertyProvider:
    """A source of monitor settings, e.g. the poll interval, keyed by property name."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Returns the raw value of the property, or None if it is unset or blank."""
        pass
