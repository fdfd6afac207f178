"""Remote archive transports.

This module moves named archive blobs to and from a remote store.
The distribution flows depend only on the put/get contract.
"""
