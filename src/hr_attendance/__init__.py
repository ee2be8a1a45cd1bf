"""HR attendance reconciliation engine.

This package is organized by feature modules (ingestion, employees, leaves,
attendance, reporting, ...) with a thin Flask controller layer and
service/repository layers underneath.
"""
