from prometheus_client import Counter


class SeatAllocationMetrics:
    """
    Seat Allocation Core Metrics Collector

    Tracks seat map rendering, booking mutations and rejected interactions
    """

    def __init__(self) -> None:
        self.seat_map_renders = Counter(
            'seat_map_renders_total',
            'Total rendered seat maps',
            ['vehicle_type'],
        )

        self.booking_mutations = Counter(
            'seat_booking_mutations_total',
            'Committed seat booking mutations',
            ['action'],  # action: upsert/clear/assign/apply/release
        )

        self.rejected_seat_clicks = Counter(
            'seat_click_rejections_total',
            'Seat clicks ignored by the selection state machine',
            ['mode', 'reason'],  # reason: booked/cap/read_only/prompt_open
        )

        self.fleet_plans = Counter(
            'fleet_plans_total',
            'Fleet packing requests',
            ['result'],  # result: empty/packed
        )

    def record_render(self, *, vehicle_type: str) -> None:
        self.seat_map_renders.labels(vehicle_type=vehicle_type).inc()

    def record_mutation(self, *, action: str) -> None:
        self.booking_mutations.labels(action=action).inc()

    def record_rejected_click(self, *, mode: str, reason: str) -> None:
        self.rejected_seat_clicks.labels(mode=mode, reason=reason).inc()

    def record_fleet_plan(self, *, unit_count: int) -> None:
        self.fleet_plans.labels(result='packed' if unit_count else 'empty').inc()


metrics = SeatAllocationMetrics()
