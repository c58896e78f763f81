"""Persistence layer: store handle and ORM documents."""
