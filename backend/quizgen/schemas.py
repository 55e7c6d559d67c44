"""
Pydantic schemas for quiz generation requests, quiz content and responses.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class QuizType(str, Enum):
	MULTIPLE_CHOICE = "multiple_choice"
	TRUE_FALSE = "true_false"
	FILL_BLANK = "fill_blank"
	ESSAY = "essay"
	INTERACTIVE = "interactive"


class QuizRequest(BaseModel):
	user_id: str = Field(..., min_length=1)
	subject: str = Field(..., min_length=1)
	topic: str = Field(..., min_length=1)
	difficulty_level: str = Field(..., description="beginner / intermediate / advanced")
	question_count: int = Field(..., ge=1, le=50)
	quiz_type: QuizType
	learning_objectives: List[str] = Field(default_factory=list)
	# Falls back to the stored profile, then "visual"
	user_learning_style: Optional[str] = None
	previous_performance: float = Field(default=75, ge=0, le=100)
	time_constraints: int = Field(default=30, ge=1, description="Minutes available")


class Question(BaseModel):
	"""A single quiz question.

	``correct_answer`` may be a list; no rule says when a question has several
	correct answers, so both shapes are stored as given.
	"""
	id: str
	question: str
	question_type: str
	options: Optional[List[str]] = None
	correct_answer: Union[str, List[str]]
	explanation: str = ""
	difficulty: str = ""
	learning_objective: str = ""
	hints: List[str] = Field(default_factory=list)
	reasoning_steps: List[str] = Field(default_factory=list)
	real_world_application: str = ""
	common_mistakes: List[str] = Field(default_factory=list)

	@field_validator("id", mode="before")
	@classmethod
	def _id_as_str(cls, v: Any) -> Any:
		return str(v) if isinstance(v, (int, float)) else v

	@field_validator("correct_answer", mode="before")
	@classmethod
	def _answer_as_text(cls, v: Any) -> Any:
		# Models sometimes emit booleans or numbers for true/false and numeric answers
		if isinstance(v, (bool, int, float)):
			return str(v).lower() if isinstance(v, bool) else str(v)
		if isinstance(v, list):
			return [str(item) for item in v]
		return v

	@field_validator("options", mode="before")
	@classmethod
	def _options_as_text(cls, v: Any) -> Any:
		if isinstance(v, list):
			return [str(item) for item in v]
		return v


class QuizContent(BaseModel):
	"""Quiz body produced by the LLM or the fallback generator."""
	title: str
	description: str = ""
	questions: List[Question] = Field(..., min_length=1)
	time_limit_minutes: int = Field(default=30, ge=1)
	passing_score: int = Field(default=70, ge=0, le=100)
	adaptive_difficulty: bool = True
	personalized_feedback: bool = True
	difficulty: Optional[str] = None


class AIInsights(BaseModel):
	recommended_approach: str
	key_concepts: List[str]
	common_mistakes: List[str]
	study_tips: List[str]
	learning_path_suggestions: List[str]
	confidence_building_strategies: List[str]


class Personalization(BaseModel):
	difficulty_adjustment: str
	learning_style_adaptation: str
	performance_prediction: float
	engagement_optimization: List[str]


class GeneratedQuizOut(QuizContent):
	id: str
	metadata: Dict[str, Any] = Field(default_factory=dict)


class QuizResponse(BaseModel):
	quiz: GeneratedQuizOut
	ai_insights: AIInsights
	personalization: Personalization
