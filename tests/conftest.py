"""Test configuration and fixtures."""

import os

import logfire

# Cheap argon2 parameters keep hashing tests fast; set before Settings loads
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("PASSWORD__TIME_COST", "1")
os.environ.setdefault("PASSWORD__MEMORY_COST", "8192")
os.environ.setdefault("PASSWORD__PARALLELISM", "1")

logfire.configure(send_to_logfire=False, console=False)
