# icebreaker/db/base.py
from sqlalchemy.orm import declarative_base

# Models register themselves on import; import icebreaker.models before create_all.
Base = declarative_base()
