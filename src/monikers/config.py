"""ContextVar-based scan configuration for monikers.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is read by the scanner and the recognizers at the start of each call.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from monikers.config import ScanConfig, scan_config_context

    with scan_config_context(ScanConfig(code_indent_width=2)):
        doc = scan(source)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Immutable scan configuration.

    Attributes:
        code_indent_width: Indent (in columns) at which a line counts as
            indented code; recognizers do not open blocks on such lines
        tab_stop: Column multiple a tab advances to when measuring indent
        case_sensitive_keywords: Match ``moniker``, ``range="`` and
            ``moniker-end`` case-sensitively
        honor_escapes: Reject opening lines whose trigger character is
            escaped with a backslash
        warn_unterminated: Emit a diagnostic when the document ends with
            blocks still open

    """

    code_indent_width: int = 4
    tab_stop: int = 4
    case_sensitive_keywords: bool = True
    honor_escapes: bool = True
    warn_unterminated: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ScanConfig":
        """Create ScanConfig from dictionary.

        Only includes keys that are valid ScanConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = ScanConfig.from_dict({"tab_stop": 8, "unknown_key": 1})
            >>> config.tab_stop
            8

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ScanConfig = ScanConfig()

_scan_config: ContextVar[ScanConfig] = ContextVar(
    "scan_config",
    default=_DEFAULT_CONFIG,
)


def get_scan_config() -> ScanConfig:
    """Get current scan configuration (thread-local)."""
    return _scan_config.get()


def set_scan_config(config: ScanConfig) -> None:
    """Set scan configuration for current context."""
    _scan_config.set(config)


def reset_scan_config() -> None:
    """Reset to the default configuration."""
    _scan_config.set(_DEFAULT_CONFIG)


@contextmanager
def scan_config_context(config: ScanConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with scan_config_context(ScanConfig(tab_stop=8)):
        ...     doc = scan(source)
        >>> # Automatically reset to previous config

    """
    previous = _scan_config.get()
    _scan_config.set(config)
    try:
        yield
    finally:
        _scan_config.set(previous)


__all__ = [
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
]
