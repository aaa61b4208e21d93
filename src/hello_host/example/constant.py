import os

name = os.environ.get("HELLO_HOST_NAME")
