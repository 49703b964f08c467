"""Application services: safety, completion, orchestration and analytics."""
