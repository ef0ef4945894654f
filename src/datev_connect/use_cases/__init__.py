"""Use-case level logic.

These modules turn a host item (resource, operation, parameters) into calls on
the integration clients and normalize the results into flat records.

They should be:
- deterministic
- unit-testable
- free of transport details
"""
