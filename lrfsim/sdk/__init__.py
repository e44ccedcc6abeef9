from .run import ConfigScanResult, scan_from_config

__all__ = ["ConfigScanResult", "scan_from_config"]
