"""POST /v1/classify - purchase category classification"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from purchase_advisor.api.v1.schemas import ClassifyRequest, ClassifyResponse
from purchase_advisor.api.dependencies import get_classification_cache, get_request_id
from purchase_advisor.domain.exceptions import InvalidPurchaseError
from purchase_advisor.domain.purchase_category import ClassificationCache, classify_purchase
from purchase_advisor.infrastructure.observability.metrics import record_classification

router = APIRouter()


@router.post("/classify", response_model=ClassifyResponse)
def classify(
    request_body: ClassifyRequest,
    request: Request,
    cache: ClassificationCache = Depends(get_classification_cache),
):
    """
    Classify a purchase as ESSENTIAL_DAILY, DISCRETIONARY_SMALL,
    DISCRETIONARY_MEDIUM or HIGH_VALUE.
    """
    try:
        classification = classify_purchase(request_body.item_name, request_body.cost, cache=cache)
    except InvalidPurchaseError as e:
        logging.warning(f"Invalid purchase: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    record_classification(classification.category, classification.cached)
    return ClassifyResponse(category=classification.category, cached=classification.cached)
