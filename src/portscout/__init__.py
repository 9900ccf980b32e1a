"""Public package interface for portscout."""

__version__ = "0.4.0"

from importlib import import_module

# Map exported attribute -> submodule containing the attribute
_ATTR_MODULES = {
    "COMMON_PORTS": "scanner.ports",
    "common_ports": "scanner.ports",
    "parse_port_range": "scanner.ports",
    "parse_targets": "scanner.targets",
    "local_targets": "scanner.targets",
    "probe": "scanner.probe",
    "Scanner": "scanner.coordinator",
    "ScanState": "scanner.coordinator",
    "scan_ports_sync": "scanner.coordinator",
    "ScannerConfig": "scanner.models",
    "ScanResult": "scanner.models",
    "ScanReport": "scanner.models",
    "ParseError": "scanner.errors",
    "ParseReason": "scanner.errors",
    "Config": "config",
    "setup_logging": "utils.logging_config",
}


def __getattr__(name: str):
    try:
        module_name = _ATTR_MODULES[name]
    except KeyError as exc:
        raise AttributeError(name) from exc
    module = import_module(f"{__name__}.{module_name}")
    value = getattr(module, name)
    globals()[name] = value
    return value


__all__ = ["__version__", *_ATTR_MODULES]
