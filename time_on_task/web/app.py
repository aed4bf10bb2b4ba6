from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
import logging

from time_on_task.services.calculator import AggregationResult, TimeOnTaskCalculator
from time_on_task.services.database import DatabaseManager
from time_on_task.config.settings import settings

logger = logging.getLogger(__name__)
app = FastAPI(title="Time on Task")

def get_calculator() -> TimeOnTaskCalculator:
    """Calculator bound to the configured event store"""
    return TimeOnTaskCalculator(DatabaseManager(settings.DB_NAME))

def _payload(result: AggregationResult, diagnostics: bool):
    if diagnostics:
        return {"results": result.to_output(), "diagnostics": result.diagnostics.to_dict()}
    return result.to_output()

@app.get("/health")
async def health():
    return {"status": "ok"}

@app.get("/api/time-on-task/students")
async def students_time_on_task(diagnostics: bool = False,
                                calculator: TimeOnTaskCalculator = Depends(get_calculator)):
    """Time on task for each student"""
    try:
        return _payload(calculator.calculate_per_student(), diagnostics)
    except Exception as e:
        logger.error(f"Error getting student time on task: {e}")
        raise HTTPException(status_code=500, detail=str(e))

@app.get("/api/time-on-task/classes")
async def classes_time_on_task(diagnostics: bool = False,
                               calculator: TimeOnTaskCalculator = Depends(get_calculator)):
    """Time on task for each class"""
    try:
        return _payload(calculator.calculate_per_class(), diagnostics)
    except Exception as e:
        logger.error(f"Error getting class time on task: {e}")
        raise HTTPException(status_code=500, detail=str(e))

@app.get("/api/time-on-task/combined")
async def combined_time_on_task(diagnostics: bool = False,
                                calculator: TimeOnTaskCalculator = Depends(get_calculator)):
    """Time on task for students and classes"""
    try:
        result = await calculator.calculate_combined()
        payload = result.to_output()
        if diagnostics:
            payload["diagnostics"] = {
                "userTimeOnTask": result.students.diagnostics.to_dict(),
                "classTimeOnTask": result.classes.diagnostics.to_dict()
            }
        return payload
    except Exception as e:
        logger.error(f"Error getting combined time on task: {e}")
        raise HTTPException(status_code=500, detail=str(e))

@app.exception_handler(404)
async def not_found_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=404,
        content={"detail": "Not found"}
    )
