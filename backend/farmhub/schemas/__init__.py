"""Pydantic schemas for API request/response validation."""
import datetime as dt
from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

FarmUnit = Literal["acres", "hectares", "sq ft", "sq m"]
CropStatus = Literal["Seedling", "Growing", "Flowering", "Mature", "Harvested"]
TaskStatus = Literal["to-do", "in-progress", "blocked", "completed"]
ProjectStatus = Literal["not-started", "active", "on-hold", "completed"]
Priority = Literal["low", "medium", "high"]
TransactionType = Literal["income", "expense"]


# === Farm Schemas ===
class FarmBase(BaseModel):
    name: str
    size: float
    unit: FarmUnit = "acres"
    location: str


class FarmCreate(FarmBase):
    """Schema for creating a new farm."""
    size: float = Field(gt=0)


class FarmUpdate(BaseModel):
    """Schema for updating a farm."""
    name: Optional[str] = None
    size: Optional[float] = Field(default=None, gt=0)
    unit: Optional[FarmUnit] = None
    location: Optional[str] = None


class FarmResponse(FarmBase):
    id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class FarmListItem(FarmResponse):
    """Farm row with the number of crops not yet harvested."""
    active_crop_count: int = 0


# === Crop Schemas ===
class CropCreate(BaseModel):
    """Schema for creating a new crop."""
    farm_id: int
    name: str
    variety: str
    planting_date: date
    expected_harvest: date
    status: CropStatus = "Seedling"
    area: float = Field(gt=0)
    notes: Optional[str] = None

    @field_validator('expected_harvest')
    @classmethod
    def validate_harvest_after_planting(cls, v, info):
        if 'planting_date' in info.data and v <= info.data['planting_date']:
            raise ValueError('expected_harvest must be after planting_date')
        return v


class CropUpdate(BaseModel):
    """Schema for updating a crop."""
    farm_id: Optional[int] = None
    name: Optional[str] = None
    variety: Optional[str] = None
    planting_date: Optional[date] = None
    expected_harvest: Optional[date] = None
    status: Optional[CropStatus] = None
    area: Optional[float] = Field(default=None, gt=0)
    notes: Optional[str] = None


class CropResponse(BaseModel):
    id: int
    farm_id: int
    farm_name: Optional[str] = None
    name: str
    variety: str
    planting_date: date
    expected_harvest: date
    status: str
    area: float
    notes: Optional[str] = None
    progress: float
    days_to_harvest: int


# === Task Schemas ===
class TaskCreate(BaseModel):
    """Schema for creating a new task."""
    title: str
    description: Optional[str] = ""
    project_id: Optional[int] = None
    farm_id: Optional[int] = None
    status: TaskStatus = "to-do"
    due_date: Optional[date] = None
    priority: Priority = "medium"
    category: Optional[str] = "General"


class TaskUpdate(BaseModel):
    """Schema for updating a task."""
    title: Optional[str] = None
    description: Optional[str] = None
    project_id: Optional[int] = None
    farm_id: Optional[int] = None
    completed: Optional[bool] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[date] = None
    priority: Optional[Priority] = None
    category: Optional[str] = None


class TaskResponse(BaseModel):
    id: int
    title: str
    description: str
    project_id: Optional[int] = None
    farm_id: Optional[int] = None
    completed: bool
    status: str
    due_date: Optional[date] = None
    priority: str
    category: str
    created_at: datetime
    urgency: str


# === Transaction Schemas ===
class TransactionCreate(BaseModel):
    """Schema for creating a new transaction."""
    farm_id: int
    type: TransactionType = "expense"
    category: str
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    date: Optional[dt.date] = None
    description: str


class TransactionUpdate(BaseModel):
    """Schema for updating a transaction."""
    farm_id: Optional[int] = None
    type: Optional[TransactionType] = None
    category: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    date: Optional[dt.date] = None
    description: Optional[str] = None


class TransactionResponse(BaseModel):
    id: int
    farm_id: int
    farm_name: Optional[str] = None
    type: str
    category: str
    amount: float
    date: date
    description: str

    model_config = {"from_attributes": True}


class FinancialSummary(BaseModel):
    income: float
    expenses: float
    profit: float
    transaction_count: int


class MonthlyTotal(BaseModel):
    month: str
    label: str
    income: float
    expenses: float


# === Project Schemas ===
class ProjectCreate(BaseModel):
    """Schema for creating a new project."""
    title: str
    description: Optional[str] = ""
    status: ProjectStatus = "not-started"
    priority: Priority = "medium"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    owner: Optional[str] = None

    @field_validator('end_date')
    @classmethod
    def validate_date_order(cls, v, info):
        start = info.data.get('start_date')
        if v is not None and start is not None and v < start:
            raise ValueError('end_date must be on or after start_date')
        return v


class ProjectUpdate(BaseModel):
    """Schema for updating a project."""
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None
    priority: Optional[Priority] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    owner: Optional[str] = None


class ProjectResponse(BaseModel):
    id: int
    title: str
    description: str
    status: str
    priority: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    owner: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectDetailResponse(ProjectResponse):
    """Project with its tasks and completion progress."""
    tasks: List[TaskResponse] = []
    completed_tasks: int
    total_tasks: int
    progress: int


# === Comment Schemas ===
class CommentCreate(BaseModel):
    task_id: int
    text: str


class CommentUpdate(BaseModel):
    text: str
    timestamp: Optional[datetime] = None


class CommentResponse(BaseModel):
    id: int
    task_id: int
    text: str
    timestamp: datetime

    model_config = {"from_attributes": True}
