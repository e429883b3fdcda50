"""Architectural property checks over an EKS template repository."""
