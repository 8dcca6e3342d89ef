from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Integer,
    String,
    create_engine,
    delete,
    func,
    select,
    update as sa_update,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

Base = declarative_base()


class CartOrm(Base):
    __tablename__ = "carts"
    id = Column(Integer, primary_key=True, autoincrement=False)
    closed = Column(Boolean, nullable=False, default=False)
    lines = relationship("CartLineOrm", back_populates="cart", cascade="all, delete-orphan")


class CartLineOrm(Base):
    __tablename__ = "cart_lines"
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), primary_key=True)
    product_id = Column(String(255), primary_key=True)
    quantity = Column(Integer, nullable=False, default=1)

    cart = relationship("CartOrm", back_populates="lines")


class SqlCartRepository:
    """Stores each cart as its product id -> quantity mapping."""

    def __init__(self, database_url: str) -> None:
        self.engine = create_engine(database_url, future=True)
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False, future=True)
        Base.metadata.create_all(bind=self.engine)

    def save(self, cart_id: int, snapshot: dict[str, int]) -> None:
        with self.SessionLocal.begin() as session:
            if session.get(CartOrm, cart_id) is None:
                session.add(CartOrm(id=cart_id))
            session.execute(delete(CartLineOrm).where(CartLineOrm.cart_id == cart_id))
            session.add_all(
                CartLineOrm(cart_id=cart_id, product_id=product_id, quantity=quantity)
                for product_id, quantity in snapshot.items()
            )

    def load(self, cart_id: int) -> dict[str, int] | None:
        with self.SessionLocal() as session:
            orm = session.get(CartOrm, cart_id)
            if orm is None or orm.closed:
                return None
            return {line.product_id: line.quantity for line in orm.lines}

    def delete(self, cart_id: int) -> None:
        # the row is kept as closed so max_id never hands its id out again
        with self.SessionLocal.begin() as session:
            session.execute(delete(CartLineOrm).where(CartLineOrm.cart_id == cart_id))
            session.execute(sa_update(CartOrm).where(CartOrm.id == cart_id).values(closed=True))

    def max_id(self) -> int | None:
        with self.SessionLocal() as session:
            return session.execute(select(func.max(CartOrm.id))).scalar_one_or_none()
