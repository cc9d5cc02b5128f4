"""
FastAPI Backend for the Transaction Text Parser
RESTful API endpoints for parsing natural-language transaction text
"""

from fastapi import FastAPI, Form, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from typing import Optional
from pathlib import Path
from datetime import date, datetime
import sys

# Add backend to path
backend_path = Path(__file__).parent.parent / 'backend'
sys.path.insert(0, str(backend_path))

# Import backend modules
from config import config
from logging_config import get_logger, setup_logging
from extractors.financial_rules import TransactionType
from extractors.text_parser import TextParser, TransactionDraft
from validators.financial_validator import DraftValidator, validate_and_fix_date
from main import BatchTextParser

setup_logging()
logger = get_logger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Transaction Text Parser API",
    description="Turn free-form Indonesian transaction text into structured drafts",
    version=config.VERSION
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _parse_today(today: Optional[str]) -> date:
    """Resolve the optional 'today' form field (YYYY-MM-DD)."""
    if not today:
        return date.today()
    try:
        return datetime.strptime(today, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format for 'today'. Use YYYY-MM-DD")


@app.get("/")
async def root():
    """Root endpoint - API information"""
    return {
        "message": config.APP_NAME,
        "version": config.VERSION,
        "endpoints": {
            "POST /parse": "Parse one transaction text",
            "POST /parse/batch": "Parse one transaction per line",
            "POST /validate": "Validate an edited transaction draft",
            "GET /health": "Health check"
        },
        "settings": config.to_dict()
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat()
    }


@app.post("/parse")
async def parse(
    text: str = Form("", description="Free-form transaction text"),
    today: Optional[str] = Form(None, description="Reference date (YYYY-MM-DD)")
):
    """
    Parse a single transaction text.

    - **text**: e.g. "Beli bakso hari ini 20 ribu"
    - **today**: optional reference date used for relative dates

    Always answers 200 with the parse result; check `success`, `errors`
    and `warnings`.
    """
    reference_date = _parse_today(today)

    try:
        parser = TextParser(today_provider=lambda: reference_date)
        return parser.parse(text).to_dict()
    except Exception as e:
        logger.error(f"Error parsing text: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/parse/batch")
async def parse_batch(
    text: str = Form(..., description="One transaction per line"),
    today: Optional[str] = Form(None, description="Reference date (YYYY-MM-DD)")
):
    """
    Parse several transactions, one per line.

    - **text**: newline separated transaction texts
    - **today**: optional reference date used for relative dates
    """
    reference_date = _parse_today(today)
    lines = [line for line in text.splitlines() if line.strip()]

    if not lines:
        raise HTTPException(status_code=400, detail="At least one transaction line is required")

    batch = BatchTextParser(today_provider=lambda: reference_date)
    try:
        results = batch.process(lines)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error parsing batch: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")

    logger.info(f"Batch parsed: {len(results)} line(s)")

    return {
        "status": "success",
        "results": [result.to_dict() for result in results],
        "summary": batch.summarize(results),
        "stats": batch.get_stats()
    }


@app.post("/validate")
async def validate(
    type_value: str = Form(..., alias="type", description="income or expense"),
    amount: int = Form(..., description="Amount in rupiah"),
    description: str = Form(...),
    category: str = Form(...),
    date_value: Optional[str] = Form(None, alias="date", description="YYYY-MM-DD, defaults to today"),
    today: Optional[str] = Form(None, description="Reference date (YYYY-MM-DD)")
):
    """
    Validate a (possibly user-edited) draft before saving.

    Future dates are replaced with today and reported in `warning`.
    """
    reference_date = _parse_today(today)

    try:
        transaction_type = TransactionType(type_value.lower())
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid type. Use 'income' or 'expense'")

    try:
        corrected_date, warning = validate_and_fix_date(date_value, reference_date)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")

    draft = TransactionDraft(
        transaction_type=transaction_type,
        amount=amount,
        description=description,
        category=category,
        date=datetime.strptime(corrected_date, "%Y-%m-%d").date()
    )

    validator = DraftValidator(today_provider=lambda: reference_date)
    is_valid = validator.validate_draft(draft)

    return {
        "valid": is_valid,
        "errors": validator.last_errors,
        "corrected_date": corrected_date,
        "warning": warning,
        "draft": draft.to_dict()
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
