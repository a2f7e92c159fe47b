"""
Dashboard endpoints — age groups, spending, preferences, profiles.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from tourism_insights.analytics.common import sanitize_for_json
from tourism_insights.data.schemas import CategoryKind
from tourism_insights.pipeline import SurveyAnalysis
from tourism_insights.api.dependencies import get_analysis, parse_age_group, validate_age_group
from tourism_insights.api.response_models import (
    AgeGroupCount, AgeGroupSpending, ProfileResponse, SpendingShare,
)

router = APIRouter(prefix="/api", tags=["dashboard"])


def _safe_json(data) -> JSONResponse:
    return JSONResponse(content=sanitize_for_json(data))


@router.get("/age-groups", response_model=list[AgeGroupCount])
def age_groups(analysis: SurveyAnalysis = Depends(get_analysis)):
    """Respondents per age group."""
    return analysis.age_groups


@router.get("/spending", response_model=list[AgeGroupSpending])
def spending(analysis: SurveyAnalysis = Depends(get_analysis)):
    """Average total spending per age group."""
    return analysis.spending


@router.get("/transport")
def transport(
    analysis: SurveyAnalysis = Depends(get_analysis),
    age_group: str | None = Depends(parse_age_group),
):
    """Transport preferences, zero counts included."""
    return _safe_json(analysis.filter_by_cohort(CategoryKind.TRANSPORT, age_group))


@router.get("/activities")
def activities(
    analysis: SurveyAnalysis = Depends(get_analysis),
    age_group: str | None = Depends(parse_age_group),
):
    return _safe_json(analysis.filter_by_cohort(CategoryKind.ACTIVITY, age_group))


@router.get("/places")
def places(
    analysis: SurveyAnalysis = Depends(get_analysis),
    age_group: str | None = Depends(parse_age_group),
):
    return _safe_json(analysis.filter_by_cohort(CategoryKind.PLACE, age_group))


@router.get("/profiles")
def profiles(analysis: SurveyAnalysis = Depends(get_analysis)):
    """Top transport / activity / place and spending mix for every age group."""
    return _safe_json(analysis.profile_records())


@router.get("/profiles/{age_group}", response_model=ProfileResponse)
def profile(age_group: str, analysis: SurveyAnalysis = Depends(get_analysis)):
    validate_age_group(age_group)
    records = analysis.profile_records()
    if age_group not in records:
        raise HTTPException(404, f"No respondents in age group {age_group}")
    return records[age_group]


@router.get("/spending-distribution/{age_group}", response_model=list[SpendingShare])
def spending_distribution(age_group: str, analysis: SurveyAnalysis = Depends(get_analysis)):
    """Positive spending sub-category means for one age group."""
    validate_age_group(age_group)
    return analysis.spending_distribution(age_group)


@router.get("/dashboard")
def dashboard(analysis: SurveyAnalysis = Depends(get_analysis)):
    """Every table in one payload."""
    return _safe_json(analysis.to_dict())
