"""Tamper evidence for page revisions and files via witnessed Merkle trees."""
