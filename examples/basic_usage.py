"""Basic usage: start a collector, report a batch, assert on the trace."""

from __future__ import annotations

import asyncio
from uuid import uuid4

from mockcollector import DetachedCollector
from mockcollector.models import Batch, LongValue, Process, Span, SpanTree, Tag, TagType
from mockcollector.renderers import render_span_tree
from mockcollector.testing import check_tag, require_span


async def main() -> None:
    collector = DetachedCollector.start()
    await collector.wait_until_ready()

    trace_id = uuid4().int
    high, low = trace_id >> 64, trace_id & 0xFFFFFFFFFFFFFFFF
    item_id = uuid4().hex

    await collector.client().submit_batch(
        Batch(
            process=Process(service_name="cart_server"),
            spans=[
                Span(
                    trace_id_high=high,
                    trace_id_low=low,
                    span_id=1,
                    operation_name="POST /items",
                    duration=4_200,
                    tags=[Tag(key="http.status_code", v_type=TagType.LONG, v_long=200)],
                ),
                Span(
                    trace_id_high=high,
                    trace_id_low=low,
                    span_id=2,
                    parent_span_id=1,
                    operation_name=f"GET /stock/{item_id}",
                    duration=1_800,
                    tags=[
                        Tag(key="http.method", v_type=TagType.STRING, v_str="GET"),
                        Tag(key="http.status_code", v_type=TagType.LONG, v_long=200),
                    ],
                ),
            ],
        )
    )

    def stock_lookup_succeeded(tree: SpanTree) -> None:
        stock_call = require_span(tree, f"GET /stock/{item_id}")
        check_tag(stock_call, "http.status_code", LongValue(value=200))

    tree = await collector.check_trace(f"{trace_id:032x}", stock_lookup_succeeded)
    print(render_span_tree(tree, verbosity="full"))


if __name__ == "__main__":
    asyncio.run(main())
