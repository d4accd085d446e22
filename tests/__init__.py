import os

# testy nie potrzebuja postgresa ani redisa
os.environ.setdefault("DATABASE_URL", "sqlite://")
