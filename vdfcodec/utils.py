from typing import Any, Mapping, TypedDict, TypeVar

DEFAULT_MAX_DEPTH = 128

U = TypeVar("U", bound=TypedDict("U", {}))


def resolve_config(config: Mapping[str, Any], default_config: U) -> U:
    """Overlay ``config`` on a copy of ``default_config``.

    Keys missing from ``config`` keep their default; keys the defaults don't
    know about are rejected so a typo doesn't silently do nothing.
    """
    unknown = set(config or {}) - set(default_config)
    if unknown:
        raise ValueError(f"Unknown config option(s): {', '.join(sorted(unknown))}")
    _config = default_config.copy()
    if config:
        for key in _config:
            if key in config:
                _config[key] = config[key]
    return _config
