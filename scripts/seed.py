"""Development data seeder: users, posts, comments and likes through the service layer."""
import asyncio
import argparse
import random
import time

from postboard.database import Base, async_session, engine
from postboard.schemas import CommentCreate, PostCreate, UserRegister
from postboard.services import comment_service, like_service, post_service, user_service

TOPICS = ["python", "fastapi", "postgresql", "sqlalchemy", "docker", "testing",
          "asyncio", "security", "performance", "api-design"]

SEED_PASSWORD = "postboard-dev-password"


async def seed(small: bool = False):
    num_users = 5 if small else 50
    num_posts = 20 if small else 2000
    max_comments_per_post = 2 if small else 5

    print(f"Seeding: {num_users} users, {num_posts} posts, up to {max_comments_per_post} comments per post")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        users = []
        for i in range(num_users):
            user = await user_service.register_user(
                session,
                UserRegister(
                    username=f"user_{i:04d}",
                    email=f"user_{i:04d}@example.com",
                    display_name=f"User {i}",
                    password=SEED_PASSWORD,
                ),
            )
            users.append(user)
        print(f"  Created {len(users)} users (password: {SEED_PASSWORD})")

        total_comments = 0
        total_likes = 0
        for i in range(num_posts):
            author = random.choice(users)
            topic = random.choice(TOPICS)
            post = await post_service.create_post(
                session,
                author,
                PostCreate(
                    title=f"Post {i}: notes on {topic}",
                    body=f"This is the full body of post {i} about {topic}. " * 10,
                ),
            )

            for _ in range(random.randint(0, max_comments_per_post)):
                await comment_service.create_comment(
                    session,
                    random.choice(users),
                    post.id,
                    CommentCreate(body=f"Thanks for writing about {topic}!"),
                )
                total_comments += 1

            for liker in random.sample(users, k=random.randint(0, len(users) // 2)):
                await like_service.like_post(session, liker, post.id)
                total_likes += 1

            if (i + 1) % 500 == 0:
                await session.flush()
                print(f"  {i + 1} posts created")

        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Users: {num_users}")
    print(f"  Posts: {num_posts}")
    print(f"  Comments: {total_comments}")
    print(f"  Likes: {total_likes}")


def main():
    parser = argparse.ArgumentParser(description="Seed the postboard database")
    parser.add_argument("--small", action="store_true", help="Use small dataset (20 posts)")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
