"""Configuration, logging and concurrency primitives."""
