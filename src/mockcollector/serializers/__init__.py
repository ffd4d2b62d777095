"""Serialization helpers."""

from .json import save_tree_json, tree_from_json, tree_to_json
from .thrift import decode_batch, encode_batch

__all__ = ["decode_batch", "encode_batch", "save_tree_json", "tree_from_json", "tree_to_json"]
