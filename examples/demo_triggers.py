#!/usr/bin/env python
#
# Demonstrate:
#   - a resource with the standard methods and custom routes
#   - mounting the resource in a WebAdminServer
#
# run:
# $ python examples/demo_triggers.py 127.0.0.1:8081
# $ curl http://127.0.0.1:8081/triggers/http/stats
#
import sys
import time
from types import SimpleNamespace
from webadmin import AbstractResource, CustomRoute, ResourceMethod, WebAdminServer, url_param


class TriggersResource(AbstractResource):
    """
    description: The triggers of the processor
    """

    def __init__(self):
        super().__init__("triggers", [ResourceMethod.GET_LIST, ResourceMethod.GET_DETAIL])

    def get_single(self, request):
        """
        summary: Trigger summary
        """
        return "triggers", {"count": len(self.processor.triggers)}

    def get_by_id(self, request, id):
        """
        summary: Retrieve a trigger
        description: Retrieve the configuration of a trigger, 404 if it doesn't exist
        """
        trigger = self.processor.triggers.get(id)
        if trigger is None:
            return None
        return {"kind": trigger["kind"], "workers": trigger["workers"]}

    def get_custom_routes(self):
        return {
            "/{id}/stats": CustomRoute("GET", self.get_stats),
            "/stats": CustomRoute("GET", self.get_all_stats),
        }

    def get_stats(self, request):
        """
        summary: Statistics of a trigger
        """
        trigger_id = url_param(request, "id")
        trigger = self.processor.triggers.get(trigger_id)
        if trigger is None:
            return "triggerStats", None, True
        return "triggerStats", {trigger_id: trigger["stats"]}, True

    def get_all_stats(self, request):
        """
        summary: Statistics of all triggers
        """
        return "triggerStats", {trigger_id: trigger["stats"] for trigger_id, trigger in self.processor.triggers.items()}, False


# the web admin only needs a reference to the processor, this one is a stub
processor = SimpleNamespace(
    triggers={
        "http": {"kind": "http", "workers": 4, "stats": {"handled": 120, "errors": 2}},
        "cron": {"kind": "cron", "workers": 1, "stats": {"handled": 7, "errors": 0}},
    }
)

if __name__ == "__main__":
    listen_address = sys.argv[1] if len(sys.argv) > 1 else ":8081"
    server = WebAdminServer(processor, WEBADMIN_LISTEN_ADDRESS=listen_address)
    server.register_resource(TriggersResource())
    server.start()
    print(f"Swagger UI: http://{listen_address}/swagger")
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        server.stop()
