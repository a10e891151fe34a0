"""Domain models and errors.

Pure data structures (Pydantic v2) and the error taxonomy. The domain knows
nothing about psycopg2, subprocesses or the CLI.
"""
