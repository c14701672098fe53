from farmhub.models import Comment, Crop, Farm, Project, Task, Transaction
from farmhub.seed.seed_data import seed_database


def test_seed_populates_once(db_session):
    seed_database()
    counts = {model.__name__: db_session.query(model).count()
              for model in (Farm, Crop, Task, Transaction, Project, Comment)}
    assert counts == {"Farm": 2, "Crop": 4, "Task": 6, "Transaction": 5, "Project": 2, "Comment": 2}

    seed_database()
    assert db_session.query(Farm).count() == 2
