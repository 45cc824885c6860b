"""Flask CLI commands for local operations."""
import click
from flask import current_app

DEMO_STUDENTS = [
    {"name": "Asha Verma", "age": 21, "course": "Computer Science"},
    {"name": "Rahul Nair", "age": 23, "course": "Mechanical Engineering"},
    {"name": "Meera Iyer", "age": 20, "course": "Economics"},
]

DEMO_PRODUCTS = [
    {
        "name": "Trail Running Shoe",
        "price": 89.99,
        "category": "Footwear",
        "variants": [
            {"color": "Red", "size": "42", "stock": 12},
            {"color": "Black", "size": "43", "stock": 0},
        ],
    },
    {
        "name": "Merino Crew Sock",
        "price": 14.5,
        "category": "Footwear Accessories",
        "variants": [{"color": "Grey", "size": "M", "stock": 40}],
    },
    {
        "name": "Canvas Tote Bag",
        "price": 25,
        "category": "Bags",
        "variants": [],
    },
]


def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        from storeapi.extensions import db

        db.create_all()
        click.echo("Database initialized.")

    @app.cli.command("seed-demo")
    def seed_demo():
        """Seed demo students and products (idempotent)."""
        from storeapi.extensions import db
        from storeapi.services.product_service import ProductRepository
        from storeapi.services.student_service import StudentRepository

        students = StudentRepository(db.session)
        products = ProductRepository(db.session)

        if students.count() == 0:
            for fields in DEMO_STUDENTS:
                students.create(fields)
            click.echo(f"Seeded {len(DEMO_STUDENTS)} demo students.")
        else:
            click.echo("Students already exist, skipping.")

        if products.count() == 0:
            for fields in DEMO_PRODUCTS:
                products.create(fields)
            click.echo(f"Seeded {len(DEMO_PRODUCTS)} demo products.")
        else:
            click.echo("Products already exist, skipping.")

    @app.cli.command("stats")
    def stats():
        """Show document counts per collection."""
        from storeapi.extensions import db
        from storeapi.services.product_service import ProductRepository
        from storeapi.services.student_service import StudentRepository

        click.echo(f"Students: {StudentRepository(db.session).count()}")
        click.echo(f"Products: {ProductRepository(db.session).count()}")

    @app.cli.command("serve")
    def serve():
        """Run the development server on HOST/PORT."""
        host = current_app.config["HOST"]
        port = current_app.config["PORT"]
        click.echo(f"Server running on http://{host}:{port}")
        current_app.run(host=host, port=port)
