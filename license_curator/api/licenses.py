from fastapi import APIRouter, HTTPException, Query
from license_curator.models.schemas import (
    ExpandResponse,
    ExpressionRequest,
    LookupResponse,
    MatchRequest,
    MatchResponse,
    MergeRequest,
    MergeResponse,
    NormalizeResponse,
    SatisfiesRequest,
    SatisfiesResponse,
)
from license_curator.services.matching import LicenseMatcher
from license_curator.services.spdx import expand, flatten, lookup_by_name, merge, normalize, satisfies


router = APIRouter()


@router.post("/licenses/normalize", response_model=NormalizeResponse)
def normalize_expression(payload: ExpressionRequest):
    return NormalizeResponse(normalized=normalize(payload.expression))


@router.post("/licenses/expand", response_model=ExpandResponse)
def expand_expression(payload: ExpressionRequest):
    return ExpandResponse(clauses=expand(payload.expression), flattened=flatten(payload.expression))


@router.post("/licenses/merge", response_model=MergeResponse)
def merge_expressions(payload: MergeRequest):
    return MergeResponse(merged=merge(payload.proposed, payload.base, payload.mode))


@router.post("/licenses/satisfies", response_model=SatisfiesResponse)
def check_satisfies(payload: SatisfiesRequest):
    return SatisfiesResponse(satisfies=satisfies(payload.first, payload.second))


@router.get("/licenses/lookup", response_model=LookupResponse)
def lookup_license(name: str = Query(..., min_length=1)):
    license_id = lookup_by_name(name)
    if not license_id:
        raise HTTPException(status_code=404, detail=f"Unknown license name: {name}")
    return LookupResponse(license=license_id)


@router.post("/licenses/match", response_model=MatchResponse, response_model_exclude_none=True)
def match_revisions(payload: MatchRequest):
    # 1) Build the revision bags the matcher expects
    source = payload.source.model_dump()
    target = payload.target.model_dump()

    # 2) Run every policy and return the verdict
    return LicenseMatcher().process(source, target)
