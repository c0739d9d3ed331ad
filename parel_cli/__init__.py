"""
Command-line interface for parel

Runs a command template over the cartesian product of one or more wordlists,
executing the generated commands in parallel.
"""
