from .base import BaseGolfModel
from .course import CourseDocument, ExtractionMethod
from .hole import Hole
from .tee import Tee

__all__ = ["BaseGolfModel", "CourseDocument", "ExtractionMethod", "Hole", "Tee"]
