"""Service layer — orchestrates discovery, parsing, generation, and output.

INVARIANT: All service-layer methods return ServiceResult.
"""
