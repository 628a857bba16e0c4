"""Elastic node provisioning for job-dispatch orchestrators."""

__version__ = "0.1.0"
