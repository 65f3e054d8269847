"""Waste report API schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import ReportStatus, Severity, UserRole


class GeoCoordinatesModel(BaseModel):
  latitude: float = Field(..., ge=-90, le=90)
  longitude: float = Field(..., ge=-180, le=180)


class AnalysisResultModel(BaseModel):
  model_config = ConfigDict(populate_by_name=True)

  is_waste: bool = Field(..., alias='isWaste')
  severity: Severity
  waste_type: str = Field(..., alias='wasteType')
  summary: str
  materials: List[str] = Field(default_factory=list)
  is_recyclable: bool = Field(..., alias='isRecyclable')
  estimated_quantity: str = Field(..., alias='estimatedQuantity')
  cleanup_recommendation: str = Field(..., alias='cleanupRecommendation')
  confidence_score: float = Field(0.0, alias='confidenceScore', ge=0.0, le=1.0)


class ReportSubmission(BaseModel):
  """Form payload sent by a citizen."""

  model_config = ConfigDict(populate_by_name=True)

  user_id: str = Field(..., alias='userId')
  user_role: UserRole = Field(UserRole.CITIZEN, alias='userRole')
  center_city: str = Field('', alias='centerCity')
  manual_waste_type: str = Field('', alias='manualWasteType')
  coordinates: Optional[GeoCoordinatesModel] = None
  photo_base64: Optional[str] = Field(None, alias='photoBase64')
  description: str = ''
  reporter_name: str = Field('', alias='reporterName')
  reporter_contact: str = Field('', alias='reporterContact')
  is_aware: str = Field('Yes', alias='isAware')


class ReportModel(ReportSubmission):
  id: str
  status: ReportStatus = ReportStatus.PENDING
  timestamp: int = Field(..., description="Submission time in epoch milliseconds.")
  ai_analysis: Optional[AnalysisResultModel] = Field(None, alias='aiAnalysis')


class ReportSummaryModel(BaseModel):
  """Report without the embedded photo, for list views."""

  model_config = ConfigDict(populate_by_name=True)

  id: str
  user_id: str = Field(..., alias='userId')
  status: ReportStatus
  timestamp: int
  center_city: str = Field(..., alias='centerCity')
  coordinates: Optional[GeoCoordinatesModel] = None
  description: str
  reporter_name: str = Field(..., alias='reporterName')
  ai_analysis: Optional[AnalysisResultModel] = Field(None, alias='aiAnalysis')


class StatusUpdateModel(BaseModel):
  status: ReportStatus
  role: UserRole


class ReportStatsModel(BaseModel):
  pending: int = 0
  verified: int = 0
  collected: int = 0
  rejected: int = 0
  total: int = 0
