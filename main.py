"""
Entry point for the production server
"""
import uvicorn

from vseo.config import Config

# Run the server if this script is executed directly
if __name__ == '__main__':
    uvicorn.run("vseo.index:app", host="0.0.0.0", port=Config.PORT)
