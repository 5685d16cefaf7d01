"""
Access package — caller-scoped data access.

    CallerContext: the identity a request asserted
    AccessPolicy: decides caller × action × entity
    scoped_data_access(): builds a handle whose every operation is
                          checked against the policy for one caller
"""

from blog_api.access.context import CallerContext
from blog_api.access.policy import AccessPolicy, OwnershipPolicy, default_policy
from blog_api.access.scoped import ScopedDataAccess, scoped_data_access

__all__ = [
    "AccessPolicy",
    "CallerContext",
    "OwnershipPolicy",
    "ScopedDataAccess",
    "default_policy",
    "scoped_data_access",
]
