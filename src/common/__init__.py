"""Shared configuration, logging, errors, job model and persistence."""
