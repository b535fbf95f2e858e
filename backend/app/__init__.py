"""Application package for the lesson content backend.

This package exposes the lesson registry, service, repository and model
modules used by the FastAPI application. It is intentionally lightweight;
individual modules contain the concrete implementations and documentation.
Lesson data lives as YAML topic files under `content/lessons/`.
"""
