"""Time authority adapters."""

from src.infrastructure.adapters.time.system_time_authority import SystemTimeAuthority

__all__: list[str] = ["SystemTimeAuthority"]
