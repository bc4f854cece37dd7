"""Decoding and handling of substrate bridge events."""