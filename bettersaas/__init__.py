"""Operator tooling for better-saas user and credential administration."""
