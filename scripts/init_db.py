"""데이터베이스 초기화 스크립트

사용법:
    python scripts/init_db.py            # 테이블 생성
    python scripts/init_db.py --demo     # 테이블 생성 + 데모 카탈로그/점원(1/clerk) 등록
"""
import argparse
import logging
import random
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

# 프로젝트 루트를 파이썬 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv
load_dotenv(project_root / ".env")

from bookstore_clerk.config import configure_logging, get_settings
from bookstore_clerk.database import (
    Base,
    build_database_url,
    create_engine_for_url,
    create_session_factory,
    init_db,
)
from bookstore_clerk.models import Author, Book, Clerk, Publisher, PurchaseHistory
from bookstore_clerk.services.auth import AuthService
from bookstore_clerk.services.transaction_manager import atomic_session
from bookstore_clerk.utils.validators import validate_book_data

logger = logging.getLogger(__name__)

DEMO_CATALOGUE = [
    # isbn, title, price, quantity, year, publisher, authors, sales
    ("9780131103627", "The C Programming Language", "52.99", 4, 1988, "Prentice Hall",
     ["Brian W. Kernighan", "Dennis M. Ritchie"], 22),
    ("9780201633610", "Design Patterns", "49.95", 6, 1994, "Addison-Wesley",
     ["Erich Gamma", "Richard Helm", "Ralph Johnson", "John Vlissides"], 18),
    ("9780262033848", "Introduction to Algorithms", "89.00", 25, 2009, "MIT Press",
     ["Thomas H. Cormen", "Charles E. Leiserson"], 3),
    ("9780596007126", "Head First Design Patterns", "44.99", 40, 2004, "O'Reilly",
     ["Eric Freeman", "Elisabeth Robson"], 2),
    ("9781449355739", "Learning Python", "64.99", 12, 2013, "O'Reilly",
     ["Mark Lutz"], 9),
    ("0306406153", "Invalid Demo Entry", "10.00", 1, 2000, "Nowhere", [], 1),
]


def seed_demo(session_factory):
    """데모 카탈로그 + 판매 이력 + 점원 1명"""
    rng = random.Random(42)
    today = date.today()

    with atomic_session(session_factory) as session:
        publishers = {}
        authors = {}
        for isbn, title, price, quantity, year, pub_name, author_names, sales in DEMO_CATALOGUE:
            is_valid, errors = validate_book_data({"isbn": isbn, "title": title, "price": price})
            if not is_valid:
                logger.warning(f"데모 도서 스킵 ({isbn}): {errors}")
                continue
            if session.get(Book, isbn):
                continue

            publisher = publishers.get(pub_name)
            if publisher is None:
                publisher = session.query(Publisher).filter(Publisher.name == pub_name).first()
                if publisher is None:
                    publisher = Publisher(name=pub_name)
                    session.add(publisher)
                publishers[pub_name] = publisher

            book = Book(
                isbn=isbn, title=title, price=Decimal(price),
                quantity=quantity, year=year, publisher=publisher,
            )
            for name in author_names:
                if name not in authors:
                    authors[name] = Author(name=name)
                book.authors.append(authors[name])
            session.add(book)

            for _ in range(sales):
                session.add(PurchaseHistory(isbn=isbn, date=today - timedelta(days=rng.randint(0, 365))))

        if session.get(Clerk, 1) is None:
            AuthService.create_clerk(session, 1, "Demo Clerk", "clerk")

    logger.info("데모 데이터 등록 완료 (점원 ID 1 / 비밀번호 clerk)")


def main():
    """DB 테이블 생성"""
    parser = argparse.ArgumentParser(description="서점 점원 DB 초기화")
    parser.add_argument("--demo", action="store_true", help="데모 데이터 등록")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings)

    engine = create_engine_for_url(build_database_url(settings))
    init_db(engine)

    print("Created tables:")
    for table in Base.metadata.sorted_tables:
        print(f"  - {table.name}")

    if args.demo:
        seed_demo(create_session_factory(engine))


if __name__ == "__main__":
    main()
