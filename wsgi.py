from app import create_app
from scheduler import start_scheduler

app = create_app()
if app.config['ENABLE_SCHEDULER']:
    start_scheduler(app)
