import bcrypt
import asyncio

# bcrypt is CPU bound; run it on the loop's default executor so it never stalls the event loop

async def hash_password_async(password: str) -> str:
    loop = asyncio.get_running_loop()
    # Generate a salt with a recommended number of rounds (e.g., 12)
    salt = await loop.run_in_executor(None, bcrypt.gensalt, 12)
    # Hash the password using the generated salt
    hashed_password = await loop.run_in_executor(
        None, bcrypt.hashpw, password.encode('utf-8'), salt
    )
    return hashed_password.decode('utf-8')

async def verify_password_async(password: str, hashed_password: str) -> bool:
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(
            None, bcrypt.checkpw, password.encode('utf-8'), hashed_password.encode('utf-8')
        )
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
