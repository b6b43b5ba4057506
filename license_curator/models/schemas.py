from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field


class ExpressionRequest(BaseModel):
    expression: Optional[str] = None


class NormalizeResponse(BaseModel):
    normalized: Optional[str] = None


class ExpandResponse(BaseModel):
    clauses: List[List[str]]
    flattened: List[str]


class MergeRequest(BaseModel):
    proposed: Optional[str] = None
    base: Optional[str] = None
    mode: Literal["OR", "AND"] = "OR"


class MergeResponse(BaseModel):
    merged: Optional[str] = None


class SatisfiesRequest(BaseModel):
    first: str
    second: str


class SatisfiesResponse(BaseModel):
    satisfies: bool


class LookupResponse(BaseModel):
    license: str


class Revision(BaseModel):
    definition: Dict[str, Any]
    harvest: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


class MatchRequest(BaseModel):
    source: Revision
    target: Revision


class MatchResponse(BaseModel):
    isMatching: bool
    match: Optional[List[Dict[str, Any]]] = None
    mismatch: Optional[List[Dict[str, Any]]] = None
