"""
Symptom Router - Symptom intake and review endpoints.
"""
from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..alerts.notifier import AlertNotifier, get_notifier
from .schemas import SymptomReportCreate, SymptomReview, SymptomReportResponse
from .service import report_symptom, list_symptom_reports, get_symptom_report, review_symptom_report

router = APIRouter()

@router.post("/", response_model=SymptomReportResponse, status_code=status.HTTP_201_CREATED)
def submit_symptom_report(
    data: SymptomReportCreate,
    db: Session = Depends(get_db),
    notifier: AlertNotifier = Depends(get_notifier)
):
    """
    Submit a symptom report

    Severity 3 and above requires follow-up; 4 and 5 raise a side-effect alert.
    """
    return report_symptom(db, data, notifier)

@router.get("/", response_model=List[SymptomReportResponse])
def read_symptom_reports(
    patient_id: str = Query(..., description="Patient whose reports to list"),
    db: Session = Depends(get_db)
):
    return list_symptom_reports(db, patient_id)

@router.get("/{report_id}", response_model=SymptomReportResponse)
def read_symptom_report(report_id: str, db: Session = Depends(get_db)):
    return get_symptom_report(db, report_id)

@router.post("/{report_id}/review", response_model=SymptomReportResponse)
def review_report(report_id: str, review: SymptomReview, db: Session = Depends(get_db)):
    """
    Record a reviewer's assessment of a symptom report
    """
    return review_symptom_report(db, report_id, review)
