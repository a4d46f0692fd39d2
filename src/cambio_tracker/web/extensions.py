"""
Flask extension instances, bound to the app in the factory.
"""
from flask_cors import CORS

cors = CORS()
