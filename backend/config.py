import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///quiznight.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Join codes are uppercase letters and digits
    JOIN_CODE_LENGTH = int(os.environ.get('JOIN_CODE_LENGTH', '6'))
    # Range answers score when within this fraction of (max - min) of the correct value
    RANGE_TOLERANCE_RATIO = float(os.environ.get('RANGE_TOLERANCE_RATIO', '0.05'))
    # Comma separated list of frontend origins allowed for CORS and Socket.IO
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,http://127.0.0.1:3000',
        ).split(',')
        if origin.strip()
    ]
