# Metadata.create_all picks up every table imported here
from .user import User
from .vehicle import Vehicle
from .transaction import Transaction
from .review import Review
