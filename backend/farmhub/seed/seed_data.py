"""
Seed data script for the FarmHub database.
Populates two farms with crops, tasks and a season of transactions,
plus a couple of projects with tasks and comments.
"""
from datetime import date, timedelta
from decimal import Decimal

from farmhub.database import SessionLocal
from farmhub.models import Comment, Crop, Farm, Project, Task, Transaction


def seed_database():
    """Seed the database with demonstration data."""
    session = SessionLocal()

    # Check if already seeded
    if session.query(Farm).first():
        print("Database already seeded, skipping...")
        session.close()
        return

    print("Seeding database...")
    today = date.today()

    # === FARMS ===
    green_valley = Farm(name="Green Valley Farm", size=120, unit="acres", location="Salinas, CA")
    sunny_acres = Farm(name="Sunny Acres", size=45.5, unit="hectares", location="Fresno, CA")
    session.add_all([green_valley, sunny_acres])
    session.flush()

    # === CROPS ===
    session.add_all([
        Crop(farm_id=green_valley.id, name="Tomatoes", variety="Roma",
             planting_date=today - timedelta(days=40), expected_harvest=today + timedelta(days=35),
             status="Flowering", area=12, notes="Drip irrigation on rows 1-8"),
        Crop(farm_id=green_valley.id, name="Lettuce", variety="Butterhead",
             planting_date=today - timedelta(days=20), expected_harvest=today + timedelta(days=25),
             status="Growing", area=4.5),
        Crop(farm_id=sunny_acres.id, name="Corn", variety="Sweet Yellow",
             planting_date=today - timedelta(days=95), expected_harvest=today - timedelta(days=5),
             status="Harvested", area=30),
        Crop(farm_id=sunny_acres.id, name="Carrots", variety="Nantes",
             planting_date=today - timedelta(days=10), expected_harvest=today + timedelta(days=60),
             status="Seedling", area=6),
    ])

    # === FARM TASKS ===
    session.add_all([
        Task(title="Repair irrigation pump", farm_id=green_valley.id, priority="high",
             category="Maintenance", due_date=today - timedelta(days=1)),
        Task(title="Apply fertilizer to tomatoes", farm_id=green_valley.id,
             category="Fertilizing", due_date=today + timedelta(days=2)),
        Task(title="Order carrot seed for second planting", farm_id=sunny_acres.id,
             priority="low", category="Planning", due_date=today + timedelta(days=14)),
    ])

    # === TRANSACTIONS ===
    session.add_all([
        Transaction(farm_id=green_valley.id, type="expense", category="Seeds",
                    amount=Decimal("450.00"), date=today - timedelta(days=42),
                    description="Roma tomato seed"),
        Transaction(farm_id=green_valley.id, type="expense", category="Fertilizer",
                    amount=Decimal("780.25"), date=today - timedelta(days=30),
                    description="Organic compost delivery"),
        Transaction(farm_id=green_valley.id, type="income", category="Vegetable Sales",
                    amount=Decimal("2150.00"), date=today - timedelta(days=7),
                    description="Farmers market lettuce sales"),
        Transaction(farm_id=sunny_acres.id, type="expense", category="Fuel",
                    amount=Decimal("320.40"), date=today - timedelta(days=12),
                    description="Diesel for harvester"),
        Transaction(farm_id=sunny_acres.id, type="income", category="Grain Sales",
                    amount=Decimal("5400.00"), date=today - timedelta(days=3),
                    description="Sweet corn to local co-op"),
    ])

    # === PROJECTS ===
    greenhouse = Project(title="Greenhouse expansion", description="Add a second hoop house for winter greens",
                         status="active", priority="high", start_date=today - timedelta(days=30),
                         end_date=today + timedelta(days=60), owner="Maria")
    website = Project(title="Farm stand website", description="Online pre-orders for weekly boxes",
                      status="not-started", owner="Sam")
    session.add_all([greenhouse, website])
    session.flush()

    frame = Task(title="Order frame kit", project_id=greenhouse.id, category="Planning",
                 status="completed", completed=True)
    permit = Task(title="File building permit", project_id=greenhouse.id, category="Documentation",
                  status="in-progress", due_date=today + timedelta(days=5))
    mockups = Task(title="Draft page mockups", project_id=website.id, category="Design")
    session.add_all([frame, permit, mockups])
    session.flush()

    session.add_all([
        Comment(task_id=permit.id, text="County office needs the site plan in PDF."),
        Comment(task_id=frame.id, text="Kit arrives next Tuesday."),
    ])

    session.commit()
    print(f"✓ Seeded {session.query(Farm).count()} farms")
    print(f"✓ Seeded {session.query(Crop).count()} crops")
    print(f"✓ Seeded {session.query(Transaction).count()} transactions")
    print(f"✓ Seeded {session.query(Project).count()} projects")
    print(f"✓ Seeded {session.query(Task).count()} tasks")
    print("Database seeding complete!")

    session.close()


if __name__ == "__main__":
    seed_database()
