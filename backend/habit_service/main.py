import logging
import datetime
from typing import Optional

from fastapi import FastAPI, APIRouter, Depends, HTTPException, Query, WebSocket, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi_utils.tasks import repeat_every

from . import crud, schemas, tasks
from .config import LOG_FILE, LOG_LEVEL, PURGE_INTERVAL_SECONDS
from .exceptions import NotFoundError, ValidationError
from .notifications import ConnectionManager, get_connection_manager
from .store import HabitStore, get_store

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# 로깅 설정
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

if LOG_FILE:
    file_handler = logging.FileHandler(LOG_FILE, mode='a')
    file_handler.setLevel(LOG_LEVEL)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger('').addHandler(file_handler)

app = FastAPI()

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allows all origins
    allow_credentials=True,
    allow_methods=["*"],  # Allows all methods
    allow_headers=["*"],  # Allows all headers
)


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Habit Service API",
        version="1.0.0",
        description="API for tracking daily habit progress and weekly reports",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi

router = APIRouter()


@router.get("/")
async def root():
    return {
        "message": "Welcome to the Habit Tracker!",
        "endpoints": [
            "/habits (GET, POST)",
            "/habits/{habit_id} (GET, PUT)",
            "/habits/{habit_id}/progress (GET)",
            "/habits/report (GET)",
            "/habits/report/archive/{report_date} (GET)",
            "/ws (WebSocket)",
        ],
    }


@router.get("/habit-service/health")
def health_check():
    return {"status": "healthy"}


@router.post("/habits", response_model=schemas.HabitResponse, status_code=status.HTTP_201_CREATED)
async def create_habit(habit: schemas.HabitCreate, store: HabitStore = Depends(get_store)):
    logger.info(f"Received request to create habit: {habit}")
    try:
        db_habit = crud.create_habit(store, habit.name, habit.daily_goal)
        return schemas.HabitResponse(data=schemas.Habit.model_validate(db_habit))
    except ValidationError as ve:
        logger.error(f"ValidationError in create_habit: {str(ve)}")
        raise HTTPException(status_code=400, detail=str(ve))
    except Exception as e:
        logger.exception(f"Unexpected error in create_habit: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to create habit: {str(e)}")


@router.get("/habits", response_model=schemas.HabitListResponse)
async def list_habits(
    completed: Optional[bool] = Query(None, description="Keep only habits that met their goal on at least one day (true) or never did (false)."),
    start_date: Optional[datetime.date] = Query(None, description="Earliest day considered by the completed filter."),
    end_date: Optional[datetime.date] = Query(None, description="Latest day considered by the completed filter."),
    store: HabitStore = Depends(get_store),
):
    try:
        result = crud.list_habits(store, completed, start_date, end_date)
        return schemas.HabitListResponse(
            data=[schemas.Habit.model_validate(h) for h in result["habits"]],
            total=result["total"],
        )
    except Exception as e:
        logger.error(f"Error listing habits: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error listing habits: {str(e)}")


# Registered before /habits/{habit_id} so "report" is not read as an id
@router.get("/habits/report", response_model=schemas.WeeklyReportResponse)
async def weekly_report(
    date: Optional[datetime.date] = Query(None, description="Last day of the 7-day window, within the retention period. Defaults to today."),
    store: HabitStore = Depends(get_store),
):
    try:
        result = crud.weekly_report(store, date)
        return schemas.WeeklyReportResponse(
            data=[schemas.WeeklyReport.model_validate(r) for r in result["report"]],
            report_date=result["report_date"],
        )
    except ValidationError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except Exception as e:
        logger.error(f"Error generating weekly report: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error generating weekly report: {str(e)}")


@router.get("/habits/report/archive/{report_date}", response_model=schemas.WeeklyReportResponse)
async def archived_report(report_date: datetime.date, store: HabitStore = Depends(get_store)):
    try:
        result = crud.get_archived_report(store, report_date)
        return schemas.WeeklyReportResponse(
            data=[schemas.WeeklyReport.model_validate(r) for r in result["report"]],
            report_date=result["report_date"],
        )
    except NotFoundError as nfe:
        raise HTTPException(status_code=404, detail=str(nfe))
    except Exception as e:
        logger.error(f"Error fetching archived report: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error fetching archived report: {str(e)}")


@router.get("/habits/{habit_id}", response_model=schemas.HabitResponse)
async def read_habit(habit_id: int, store: HabitStore = Depends(get_store)):
    try:
        db_habit = crud.get_habit(store, habit_id)
        return schemas.HabitResponse(data=schemas.Habit.model_validate(db_habit))
    except NotFoundError as nfe:
        raise HTTPException(status_code=404, detail=str(nfe))


@router.put("/habits/{habit_id}", response_model=schemas.ProgressResponse)
async def record_progress(
    habit_id: int,
    update: Optional[schemas.ProgressUpdate] = None,
    store: HabitStore = Depends(get_store),
):
    update = update or schemas.ProgressUpdate()
    try:
        result = crud.record_progress(store, habit_id, update.quantity, update.date)
        return schemas.ProgressResponse(data=schemas.Progress(**result))
    except NotFoundError as nfe:
        logger.warning(f"Progress reported for unknown habit {habit_id}")
        raise HTTPException(status_code=404, detail=str(nfe))
    except ValidationError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except Exception as e:
        logger.exception(f"Unexpected error in record_progress: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error recording progress: {str(e)}")


@router.get("/habits/{habit_id}/progress", response_model=schemas.ProgressResponse)
async def read_progress(
    habit_id: int,
    date: Optional[datetime.date] = Query(None, description="Day to read. Defaults to today."),
    store: HabitStore = Depends(get_store),
):
    try:
        result = crud.get_progress(store, habit_id, date)
        return schemas.ProgressResponse(data=schemas.Progress(**result))
    except NotFoundError as nfe:
        raise HTTPException(status_code=404, detail=str(nfe))


@router.websocket("/ws")
async def reminders_socket(websocket: WebSocket, manager: ConnectionManager = Depends(get_connection_manager)):
    await manager.connect(websocket)
    try:
        while True:
            # Clients only listen; text or binary frames they send are ignored
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        manager.disconnect(websocket)


app.include_router(router)


# 만료된 진행 기록 정리 (매일 실행)
@app.on_event("startup")
@repeat_every(seconds=PURGE_INTERVAL_SECONDS)
async def purge_expired_progress_task():
    tasks.run_retention_purge(get_store())


@app.on_event("startup")
async def start_reminder_scheduler():
    tasks.start_scheduler(get_store(), get_connection_manager())


@app.on_event("shutdown")
async def stop_reminder_scheduler():
    tasks.stop_scheduler()


if __name__ == "__main__":
    import uvicorn
    from .config import HOST, PORT
    uvicorn.run(app, host=HOST, port=PORT)
