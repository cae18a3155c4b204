#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Cube Report - Backend 실행 파일
루트 디렉토리에서 실행: python assistant.py
"""

import os
import sys
from pathlib import Path

# Windows에서 UTF-8 출력 설정
if sys.platform == "win32":
    if hasattr(sys.stdout, 'reconfigure'):
        sys.stdout.reconfigure(encoding='utf-8')
    if hasattr(sys.stderr, 'reconfigure'):
        sys.stderr.reconfigure(encoding='utf-8')

# 프로젝트 루트 디렉토리
ROOT_DIR = Path(__file__).parent
BACKEND_DIR = ROOT_DIR / "backend"

# Python path에 backend 추가
sys.path.insert(0, str(BACKEND_DIR))

if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))

    print("🚀 Starting Cube Report Backend...")
    print(f"📂 Backend Directory: {BACKEND_DIR}")
    print(f"🌐 Server: http://localhost:{port}")
    print(f"📚 API Docs: http://localhost:{port}/docs")
    print("-" * 50)

    # 현재 디렉토리를 backend로 변경 (.env 로드 경로)
    os.chdir(BACKEND_DIR)

    try:
        uvicorn.run(
            "cube_report.main:app",
            host=host,
            port=port,
            reload=False,
            log_config=None,
            use_colors=False
        )
    except KeyboardInterrupt:
        print("\n👋 서버 종료 중...")
        sys.exit(0)
