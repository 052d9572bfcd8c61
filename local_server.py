#!/usr/bin/env python3
"""
Local API Server for the 3DS VSEO Video SEO Optimizer

This script runs the API with auto-reload for development and testing.
API keys are supplied per request, so the only local prerequisites are
yt-dlp and ffmpeg on PATH.

Usage:
    python local_server.py

This will start the server at http://localhost:$PORT (default 10000)
"""
import shutil
import sys

import uvicorn

from vseo.config import Config

if __name__ == '__main__':
    print("Starting local API server for 3DS VSEO")
    print(f"Python version: {sys.version}")

    if not shutil.which(Config.YTDLP_BINARY):
        print(f"\nWARNING: {Config.YTDLP_BINARY} was not found on PATH!")
        print("YouTube download and metadata endpoints will fail.\n")
    if not shutil.which("ffmpeg"):
        print("\nWARNING: ffmpeg was not found on PATH!")
        print("yt-dlp cannot convert audio to WAV without it.\n")

    print(f"\nStarting server at http://localhost:{Config.PORT}")
    print(f"Web interface: http://localhost:{Config.PORT}/app")
    print("Press Ctrl+C to stop the server")
    uvicorn.run("vseo.index:app", host='0.0.0.0', port=Config.PORT, reload=True)
