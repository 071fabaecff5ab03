"""RPC input and output schemas."""
