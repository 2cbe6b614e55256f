"""
Urinal Algorithm 서버 진입점
실행: python run.py
접속: http://localhost:8000/docs
"""
import os
import sys
from pathlib import Path

import uvicorn


def main():
    """메인 실행 함수"""
    print("=" * 60)
    print("Urinal Algorithm - stall selection service")
    print("=" * 60)
    print()

    # 환경 변수 로드 (.env)
    from dotenv import load_dotenv
    load_dotenv()

    # 서버 설정
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "False").lower() == "true"

    url = f"http://{host}:{port}"

    print(f"[*] 서버 주소: {url}")
    print(f"[*] 프로젝트 디렉토리: {Path.cwd()}")
    print(f"[*] 자동 재시작: {'활성화' if reload else '비활성화'}")
    print()
    print("서버를 중지하려면 Ctrl+C를 누르세요.")
    print("=" * 60)
    print()

    try:
        uvicorn.run(
            "api.app:app",
            host=host,
            port=port,
            reload=reload,
            reload_dirs=["api", "src"],
            log_level=os.getenv("LOG_LEVEL", "info").lower(),
        )
    except KeyboardInterrupt:
        print("\n\n[*] 서버를 종료합니다.")
    except Exception as e:
        print(f"\n[ERROR] 서버 실행 중 오류 발생: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
