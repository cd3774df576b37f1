"""Application layer for the forum bounded context.

Services, the mutation guard registry and the referential-integrity
validator. Everything here talks to storage through the ports only.
"""
