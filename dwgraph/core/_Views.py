import polars as pl


class ViewsClass:
    # Materialized views

    def edges_view(self):
        """Build a Polars DF [DataFrame] of all edges in ascending traversal order.

        Returns
        ---
        polars.DataFrame
            Columns ``source``, ``target``, ``weight``; one row per edge.

        Notes
        -
        The frame is a snapshot: later mutations of the graph do not affect it.
        Node and weight values must be types Polars can hold in a column.

        """
        sources, targets, weights = [], [], []
        for src, dst, weight in self:
            sources.append(src)
            targets.append(dst)
            weights.append(weight)
        if not sources:
            return pl.DataFrame(schema={"source": pl.Null, "target": pl.Null, "weight": pl.Null})
        return pl.DataFrame({"source": sources, "target": targets, "weight": weights})

    def nodes_view(self):
        """Single-column ``node`` frame with every node in ascending order."""
        nodes = self.nodes()
        if not nodes:
            return pl.DataFrame(schema={"node": pl.Null})
        return pl.DataFrame({"node": nodes})
