from .bplus_tree import DEFAULT_ORDER, BPlusTree

__all__ = ["DEFAULT_ORDER", "BPlusTree"]
