"""Scripts installed next to the build directory (linker wrappers)."""
