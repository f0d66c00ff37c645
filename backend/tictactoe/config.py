import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3001'))
    # Dev mode; also lets socketio.run use the Werkzeug server
    DEBUG = os.environ.get('DEBUG', '').lower() in ('1', 'true', 'yes')
    # '*' or a comma separated list of origins
    CORS_ALLOWED_ORIGINS = os.environ.get('CORS_ALLOWED_ORIGINS', '*')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # strftime format for the time-of-day stamp on chat messages
    CHAT_TIMESTAMP_FORMAT = os.environ.get('CHAT_TIMESTAMP_FORMAT', '%H:%M:%S')
