"""Codec operations wrapped in the ServiceResult contract."""
