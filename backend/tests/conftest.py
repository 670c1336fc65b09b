import os

# Required database settings must exist before brigadas.main builds the app
os.environ.setdefault("DB_SERVER", "localhost")
os.environ.setdefault("DB_USER", "brigadas")
os.environ.setdefault("DB_PASSWORD", "brigadas")
os.environ.setdefault("DB_DATABASE", "brigadas_test")
os.environ.setdefault("ENVIRONMENT", "development")
