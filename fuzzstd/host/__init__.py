from fuzzstd.host.base import BaseHost
from fuzzstd.host.pyevm import PyEvmHost

__all__ = ["BaseHost", "PyEvmHost"]
