from __future__ import annotations

import asyncio
import os

from dotenv import load_dotenv
from sqlalchemy import select

from app.auth.security import get_password_hash
from app.db import SessionLocal
from app.models.board import Board
from app.models.board_member import BoardMember
from app.models.column import Column
from app.models.task import Task
from app.models.user import User

load_dotenv()

DEMO_USERS = [
    ("alice", "alice@example.com"),
    ("bob", "bob@example.com"),
]

DEMO_BOARD = "Sprint 1"
DEMO_COLUMNS = ["Todo", "Doing", "Done"]
DEMO_TASK = "Write spec"


async def seed() -> None:
    print("Starting seed process...")
    password = os.getenv("DEMO_PASSWORD", "password123")
    async with SessionLocal() as db:
        users = {}
        for username, email in DEMO_USERS:
            user = (await db.execute(select(User).where(User.username == username))).scalar_one_or_none()
            if user is None:
                user = User(username=username, email=email, password_hash=get_password_hash(password))
                db.add(user)
                await db.flush()
                print(f"Created user: {username}")
            users[username] = user

        owner, member = users["alice"], users["bob"]
        board = (
            await db.execute(select(Board).where(Board.owner_id == owner.id, Board.name == DEMO_BOARD))
        ).scalars().first()
        if board is None:
            board = Board(name=DEMO_BOARD, owner_id=owner.id)
            db.add(board)
            await db.flush()
            db.add(BoardMember(board_id=board.id, user_id=member.id))

            columns = []
            for position, name in enumerate(DEMO_COLUMNS, start=1):
                column = Column(name=name, board_id=board.id, position=position)
                db.add(column)
                columns.append(column)
            await db.flush()

            db.add(Task(title=DEMO_TASK, position=1, column_id=columns[0].id, created_by=owner.id))
            print(f'Created board "{DEMO_BOARD}"')
        else:
            print("Demo board already exists. Skipping creation.")

        await db.commit()
    print("Seed complete.")


if __name__ == "__main__":
    asyncio.run(seed())
