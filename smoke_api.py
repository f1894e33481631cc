#!/usr/bin/env python3
"""
Smoke check against a running playlist-stats server.
Usage: python smoke_api.py <playlist_id> [base_url]
"""
import sys
import requests

if len(sys.argv) < 2:
    print("Usage: python smoke_api.py <playlist_id> [base_url]")
    sys.exit(1)

playlist_id = sys.argv[1]
base_url = sys.argv[2] if len(sys.argv) > 2 else "http://localhost:8080"


def show(response):
    print(f"Status: {response.status_code}")
    print(f"Full URL: {response.url}")
    if response.headers.get("Content-Type") != "application/json":
        print(f"Error: {response.text}")
        sys.exit(1)
    data = response.json()
    print(f"Got {len(data['Tracks'])} tracks, MSE {data['MSE']:.4f}")
    print(f"Centroid: {data['Centroid']}")
    for track in data["Tracks"][:3]:
        print(f"  - {track['Name']} by {', '.join(track['Artists'])}")


# Test 1: Playlist statistics
print("Test 1: Getting playlist statistics...")
show(requests.get(f"{base_url}/playlist", params={"id": playlist_id}, timeout=30))

# Test 2: Recommendations seeded from the playlist
print("\nTest 2: Getting recommendations...")
show(requests.get(f"{base_url}/recs", params={"id": playlist_id, "energy": 0.8, "valence": 0.6}, timeout=30))
