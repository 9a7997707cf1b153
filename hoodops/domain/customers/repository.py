"""Customer repository - Database operations for customers"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Customer, Job


class CustomerRepository:
    """Repository for customer database operations"""

    @staticmethod
    def get_customers(db: Session, search: Optional[str] = None) -> list[Customer]:
        """Get customers ordered by name, optionally filtered by name, city or phone"""
        query = db.query(Customer)

        if search:
            search_term = f"%{search.lower()}%"
            query = query.filter(
                (Customer.name.ilike(search_term))
                | (Customer.city.ilike(search_term))
                | (Customer.contact_phone.ilike(search_term))
            )

        return query.order_by(Customer.name.asc()).all()

    @staticmethod
    def get_customer_by_id(db: Session, customer_id: int) -> Optional[Customer]:
        return db.query(Customer).filter(Customer.id == customer_id).first()

    @staticmethod
    def get_job_counts(db: Session, customer_ids: list[int]) -> dict[int, int]:
        """Number of jobs per customer id"""
        if not customer_ids:
            return {}

        rows = (
            db.query(Job.customer_id, func.count(Job.id))
            .filter(Job.customer_id.in_(customer_ids))
            .group_by(Job.customer_id)
            .all()
        )
        return {customer_id: count for customer_id, count in rows}

    @staticmethod
    def create_customer(db: Session, **customer_data) -> Customer:
        """Create a new customer"""
        customer = Customer(**customer_data)
        db.add(customer)
        db.commit()
        db.refresh(customer)
        return customer

    @staticmethod
    def update_customer(db: Session, customer: Customer, **updates) -> Customer:
        """Update a customer with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(customer, key):
                setattr(customer, key, value)

        db.commit()
        db.refresh(customer)
        return customer

    @staticmethod
    def delete_customer(db: Session, customer: Customer) -> None:
        """Delete a customer and its jobs"""
        db.delete(customer)
        db.commit()
