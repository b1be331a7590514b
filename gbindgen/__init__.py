"""gbindgen — GObject C header generator for Rust crates."""

__version__ = "0.1.0"
