"""Basic usage example for pylifxcloud library."""

import asyncio

from pylifxcloud import BLUE, Color, LifxClient, Selector, State


async def main() -> None:
    """Demonstrate basic usage of pylifxcloud."""
    # Personal access token from https://cloud.lifx.com/settings
    async with LifxClient("your_token") as client:
        print("Connected to LIFX cloud API")

        # Describe all lights
        lights = await client.get_lights()
        print(f"Found {len(lights)} light(s)")

        for light in lights:
            print(f"\nLight: {light.label}")
            print(f"  ID: {light.id}")
            print(f"  Product: {light.product_name}")
            print(f"  Connected: {light.connected}")
            print(f"  Power: {'on' if light.power else 'off'}")
            print(f"  Brightness: {light.brightness}")

        if not lights:
            return

        first = client.select(Selector.id(lights[0].id))

        print("\nSetting warm white at 40% over two seconds...")
        await first.set_state().power(True).color(Color.kelvin(2700)).brightness(0.4).transition(2).send()

        print("Dimming by 10%...")
        await first.change_state().brightness(-0.1).send()

        print("Breathing blue three times...")
        await first.breathe(BLUE).cycles(3).period(1.5).send()

        print("Cycling through two states...")
        await first.cycle().add(State(brightness=0.2)).add(State(brightness=0.8)).send()

        # Check a color string before using it
        color = Color.parse("rgb:255,128,0")
        if color.is_valid():
            print(f"Setting {color}...")
            await first.set_state().color(color).send()


if __name__ == "__main__":
    asyncio.run(main())
