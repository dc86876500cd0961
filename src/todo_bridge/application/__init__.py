"""Application layer – idempotency, dispatch, bridge pipeline, pagination."""
