"""GlowMatch: skincare product recommendation service.

This package provides a backend service that ranks a published skincare
catalog against a user's skin type and concerns.

Modules:
    api: FastAPI application and REST API endpoints
    recommender: Tag parsing, scoring and ranking logic
    catalog: Product storage, catalog snapshots and seeding
"""

__version__ = "0.1.0"
