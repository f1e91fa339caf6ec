import asyncio
import os
import sys

import httpx

API_URL = os.environ.get("API_URL", "http://localhost:8000")


async def verify_full_e2e():
    print("🌟 STARTING END-TO-END WALKTHROUGH 🌟")
    print("=" * 45)

    async with httpx.AsyncClient(base_url=API_URL, timeout=60.0) as client:
        # 1. Health
        print("🩺 Step 1: Checking service health...")
        resp = await client.get("/health")
        health = resp.json()
        print(f"  redis={health.get('redis')} completion_api={health.get('completion_api')}")
        if health.get("redis") != "up":
            print("  ❌ Redis is not reachable, aborting.")
            return False

        # 2. Ingest content
        print("\n📥 Step 2: Ingesting text and a file...")
        items = []
        resp = await client.post(
            "/api/upload",
            json={"type": "text", "text": "Python generators produce values lazily with the yield keyword."},
        )
        if resp.status_code != 200:
            print(f"  ❌ Text ingestion failed: {resp.text}")
            return False
        text_item = resp.json()
        items.append({"type": "text", "title": text_item["title"], "content": text_item["content"]})
        print(f"  ✅ Text stored: {text_item['id']}")

        resp = await client.post(
            "/api/upload",
            files={"file": ("notes.md", b"# asyncio\nThe event loop schedules coroutines.", "text/markdown")},
        )
        if resp.status_code != 200:
            print(f"  ❌ File upload failed: {resp.text}")
            return False
        file_item = resp.json()
        items.append({"type": "file", "name": "notes.md", "content": file_item["content"]})
        print(f"  ✅ File stored: {file_item['id']}")

        # 3. Analyze
        print("\n🧠 Step 3: Generating analysis...")
        resp = await client.post("/api/analyze", json={"content": items})
        if resp.status_code != 200:
            print(f"  ❌ Analysis failed: {resp.text}")
            return False
        analysis = resp.json()
        print(f"  ✅ {analysis['title']} ({len(analysis['learningPlan'])} plan steps, "
              f"{len(analysis['insights'])} insights, {len(analysis['questions'])} questions)")

        # 4. Save and list
        print("\n💾 Step 4: Archiving the analysis...")
        resp = await client.post("/api/save-result", json=analysis)
        if resp.status_code != 200:
            print(f"  ❌ Save failed: {resp.text}")
            return False
        saved_id = resp.json()["id"]

        resp = await client.get("/api/save-result")
        results = resp.json().get("results", [])
        if not results or results[0].get("id") != saved_id:
            print("  ❌ Saved analysis is not at the head of the archive.")
            return False
        print(f"  ✅ Archive lists {len(results)} results, newest {saved_id}")

    print("\n🏁 END-TO-END WALKTHROUGH PASSED")
    return True


if __name__ == "__main__":
    ok = asyncio.run(verify_full_e2e())
    sys.exit(0 if ok else 1)
