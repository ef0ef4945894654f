"""DATEVconnect integration core.

Resource/operation dispatch over the DATEV REST APIs (accounting, document
management, identity, order management) with a transport-agnostic HTTP layer.
"""
