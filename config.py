import os
import tempfile

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Config:
    """Base configuration, values come from the environment"""
    SECRET_KEY = os.environ.get('SECRET_KEY')
    DATABASE_PATH = os.environ.get('CAREER_COACH_DB_PATH', os.path.join(BASE_DIR, 'consultations.db'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FILE = os.environ.get('LOG_FILE')
    LOG_REQUEST_BODIES = False
    DEBUG = False
    TESTING = False


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')
    LOG_REQUEST_BODIES = True


class ProductionConfig(Config):
    LOG_FILE = os.environ.get('LOG_FILE', 'app.log')


class TestingConfig(Config):
    TESTING = True
    DATABASE_PATH = os.environ.get(
        'CAREER_COACH_TEST_DB_PATH', os.path.join(tempfile.gettempdir(), 'career_coach_test.db')
    )
    LOG_LEVEL = 'DEBUG'
    LOG_FILE = None


config = {
    'default': Config,
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}
