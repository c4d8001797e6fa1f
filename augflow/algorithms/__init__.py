"""Max-flow algorithms: residual network, path finders and the flow engine."""
