"""
Address book router module generic functionalities
"""

from fastapi import Depends

from ._router import router
from ..dependency import MinimalRequestData


@router.get("/health", tags=["Generic"], response_model=dict)
async def verify_running_backend(_: MinimalRequestData = Depends(MinimalRequestData)):
    """
    Return 200 OK with an empty object as body to only verify that the service and the middlewares work
    """

    return {}
