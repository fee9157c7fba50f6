"""
Root Route

Build a CBMT root from leaf digests.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import get_root_builder
from api.models.requests import BuildRootRequest
from api.models.responses import RootResponse
from core.crypto.hashing import digest_from_hex, to_hex
from core.merkle import tree_index


logger = logging.getLogger(__name__)

router = APIRouter(tags=["commitments"])


@router.post("/root", response_model=RootResponse)
async def build_root(request: BuildRootRequest) -> RootResponse:
    """
    Compute the root of the supplied leaves.

    An empty leaf list returns the all-zero root.
    """
    builder = get_root_builder()

    leaves = request.leaf_bytes()
    root = builder.build_root(leaves)
    committed = None
    if request.secondary_root is not None:
        secondary = digest_from_hex(request.secondary_root, "secondary_root")
        committed = to_hex(builder.build_committed_root(leaves, secondary))

    logger.info(f"Built root over {len(leaves)} leaves")

    return RootResponse(
        ok=True,
        leaf_count=len(leaves),
        depth=tree_index.tree_depth(len(leaves)),
        root=to_hex(root),
        committed_root=committed,
    )
