"""Example usage of CanvasEngine: drawing a zone, selecting and arranging devices."""
from plancanvas import (
    CanvasEngine,
    Device,
    DisplayBounds,
    KeyEvent,
    KeyKind,
    Modifiers,
    Point,
    PointerEvent,
    PointerKind,
    WheelEvent,
)


def click(engine, x, y, **modifiers):
    engine.handle_pointer(PointerEvent(PointerKind.DOWN, x, y, modifiers=Modifiers(**modifiers)))
    engine.handle_pointer(PointerEvent(PointerKind.UP, x, y, modifiers=Modifiers(**modifiers)))


def main():
    print("=" * 60)
    print("CanvasEngine Session Example")
    print("=" * 60)

    # Example 1: Create the engine and feed it the floor plan state
    print("\n1. Creating engine...")
    engine = CanvasEngine(config={"viewport_width": 1024, "viewport_height": 768})
    engine.set_display_bounds(DisplayBounds(x=112, y=0, width=800, height=768,
                                            natural_width=2000, natural_height=1920))
    engine.set_devices([
        Device(id="fx-101", position=Point(0.20, 0.30), category="fixture-16ft", label="Aisle 1"),
        Device(id="fx-102", position=Point(0.25, 0.32), category="fixture-12ft", label="Aisle 2"),
        Device(id="mo-201", position=Point(0.70, 0.60), category="motion"),
        Device(id="ls-301", position=Point(0.50, 0.80), category="light-sensor", locked=True),
    ])

    engine.on("zone_created", lambda polygon: print(f"  zone_created: {len(polygon)} points"))
    engine.on("selection_changed", lambda ids, zone: print(f"  selection_changed: {sorted(ids)} zone={zone}"))
    engine.on("viewport_changed", lambda scale, pan: print(f"  viewport_changed: scale={scale:.2f} pan=({pan.x:.0f}, {pan.y:.0f})"))
    engine.on("devices_arranged", lambda updates: print(f"  devices_arranged: {len(updates)} devices"))
    engine.on("validation_failed", lambda message: print(f"  validation_failed: {message}"))

    # Example 2: Draw a rectangle zone with two clicks
    print("\n2. Drawing a rectangle zone...")
    engine.set_mode("draw-rectangle")
    top_left = engine.to_screen(Point(0.1, 0.1))
    bottom_right = engine.to_screen(Point(0.45, 0.5))
    click(engine, top_left.x, top_left.y)
    click(engine, bottom_right.x, bottom_right.y)
    zone = engine.zones[-1]
    print(f"  Created {zone.name} ({zone.id})")

    # Example 3: Lasso the two fixtures
    print("\n3. Lasso selection...")
    engine.set_mode("select")
    start = engine.to_screen(Point(0.15, 0.25))
    end = engine.to_screen(Point(0.30, 0.35))
    engine.handle_pointer(PointerEvent(PointerKind.DOWN, start.x, start.y))
    engine.handle_pointer(PointerEvent(PointerKind.MOVE, end.x, end.y))
    engine.handle_pointer(PointerEvent(PointerKind.UP, end.x, end.y))

    # Example 4: Bulk operations
    print("\n4. Arranging and aligning the selection...")
    engine.arrange_selection_in_zone(zone.id)
    engine.align_selection()
    for device in engine.devices:
        print(f"  {device.id}: ({device.position.x:.3f}, {device.position.y:.3f}) "
              f"{device.orientation_degrees:.0f} deg")

    # Example 5: Zoom and keyboard
    print("\n5. Zooming...")
    engine.handle_wheel(WheelEvent(512, 384, delta_y=-120))
    engine.handle_key(KeyEvent(KeyKind.DOWN, "+"))
    engine.handle_key(KeyEvent(KeyKind.DOWN, "Escape"))

    # Example 6: Render layers
    print("\n6. Render layers...")
    for layer in engine.render_layers():
        print(f"  {layer.name}: {len(layer.shapes)} shapes")

    print("\n" + "=" * 60)
    print("Example completed!")
    print("=" * 60)


if __name__ == "__main__":
    main()
