"""Cache key builders for consistent key formatting."""


class CacheKeys:
    """Cache key builders for consistent key formatting."""

    PREFIX = "ensgraph"

    @classmethod
    def profile(cls, ens_name: str) -> str:
        """Key for a resolved ENS profile."""
        return f"{cls.PREFIX}:profile:{ens_name.lower()}"

    @classmethod
    def primary_name(cls, address: str) -> str:
        """Key for the reverse record of an address."""
        return f"{cls.PREFIX}:name:{address.lower()}"

    @classmethod
    def graph(cls) -> str:
        """Key for the rendered friendship graph."""
        return f"{cls.PREFIX}:graph"
