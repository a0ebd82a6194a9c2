"""HTTP service exposing the multi-broker consolidation pipeline."""
