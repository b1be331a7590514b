"""External tool adapters — cargo and the binding generator."""

from gbindgen.adapters.base import Adapter, BindingGenerator
from gbindgen.adapters.cargo import CargoAdapter
from gbindgen.adapters.cbindgen import CbindgenAdapter

__all__ = ["Adapter", "BindingGenerator", "CargoAdapter", "CbindgenAdapter"]
