import os

# Must run before config is imported: the app refuses to start without a signing key
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-0123456789abcdef0123456789abcdef")
os.environ.setdefault("ADMIN_API_KEY", "test-admin-key-12345")
os.environ.setdefault("CONFIG_FILE_PATH", os.path.join(os.path.dirname(__file__), "env.test.yaml"))
