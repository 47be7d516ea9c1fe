"""Standard library of adapters shipped with ipldsel."""
