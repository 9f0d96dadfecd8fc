"""Payload ingestion."""
