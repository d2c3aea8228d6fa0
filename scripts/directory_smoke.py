import asyncio
import os
import aiohttp
from custom_components.oba_regions.pyoba import Coordinate, RegionDirectoryClient, select_region

async def main():
    url = os.environ.get("OBA_DIRECTORY_URL", "https://regions.onebusaway.org/regions-v3.json")
    lat = float(os.environ.get("OBA_LAT", "47.6062"))
    lon = float(os.environ.get("OBA_LON", "-122.3321"))
    async with aiohttp.ClientSession() as session:
        client = RegionDirectoryClient(url, session=session)
        regions = await client.fetch_regions()
        print("Regions:", [r.name for r in regions])
        print("Selected:", select_region(Coordinate(lat, lon), regions))

if __name__ == "__main__":
    asyncio.run(main())
