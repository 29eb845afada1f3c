"""Order capture service: store orders in MongoDB and notify Event Hub."""
