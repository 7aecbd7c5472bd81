from donorlink.core.config import settings

if settings.use_mongo:
    from .core.db import get_db
    from .repos.mongo import MongoRepo
    _repo_singleton = MongoRepo(get_db())
else:
    from .repos.inmemory import InMemoryRepo
    _repo_singleton = InMemoryRepo()

def get_repo():
    return _repo_singleton
